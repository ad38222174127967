"""Share Refresh — apply compute_share_of_pool to an account and report zero supply.

Invariants:
    - account.share_of_pool always equals compute_share_of_pool(balance, supply).value
    - A zero-supply result is never silent: WARNING log with error_code
      ZERO_TOTAL_SUPPLY plus a ReportedCondition staged on the TransactionContext
    - With settings.halt_on_zero_supply the condition raises ZeroTotalSupplyError
      instead, aborting the whole event (nothing partially applied)
"""

import logging

from pool_indexer.config import Settings
from pool_indexer.core.errors import ErrorContext, ZeroTotalSupplyError
from pool_indexer.core.events import PoolEvent
from pool_indexer.core.share_of_pool import compute_share_of_pool
from pool_indexer.core.transaction_context import ReportedCondition, TransactionContext
from pool_indexer.core.repository_protocols import AccountLike, PoolLike

logger = logging.getLogger(__name__)

ZERO_TOTAL_SUPPLY = "ZERO_TOTAL_SUPPLY"


def refresh_share_of_pool(
    account: AccountLike,
    pool: PoolLike,
    event: PoolEvent,
    context: TransactionContext,
    settings: Settings,
) -> None:
    """Recompute account.share_of_pool against the pool's current total supply."""
    share = compute_share_of_pool(account.lp_balance, pool.total_supply)
    account.share_of_pool = share.value
    if not share.zero_supply:
        return

    coords = event.coords
    if settings.halt_on_zero_supply:
        raise ZeroTotalSupplyError(
            pool.id,
            ErrorContext(
                tx_hash=coords.tx_hash, log_index=coords.log_index,
                event_kind=event.kind.value,
            ),
        )
    logger.warning(
        "Pool total supply is 0; share of pool set to 0",
        extra={
            "error_code": ZERO_TOTAL_SUPPLY,
            "pool": pool.id,
            "account": account.id,
            "tx_hash": coords.tx_hash,
            "log_index": coords.log_index,
        },
    )
    context.stage_condition(ReportedCondition(
        code=ZERO_TOTAL_SUPPLY,
        pool=pool.id,
        tx_hash=coords.tx_hash,
        log_index=coords.log_index,
        account=account.id,
    ))
