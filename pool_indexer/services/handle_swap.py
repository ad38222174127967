"""Swap Handler — TokenExchange and TokenExchangeUnderlying.

Invariants:
    - Audit entry persisted first
    - Sold asset A (index 0): reserve_a += sold, reserve_b -= bought
      Sold asset B (index 1): reserve_a -= bought, reserve_b += sold
    - volume += sold + bought; pool.updated_at = block timestamp
    - Trader: last_activity = block timestamp, tx_count += 1
    - One PoolSnapshot, one AccountSnapshot and one Swap PoolTransaction per event
    - Asset indexes outside {0, 1} raise AssetIndexError before any aggregate moves

Design Decisions:
    - Both exchange variants share apply_swap: the underlying flag only changes the
      audit entry's event_kind
"""

import logging

from pool_indexer.config import Settings
from pool_indexer.core.domain_types import ASSET_A, ASSET_B, PoolTransactionType
from pool_indexer.core.errors import AssetIndexError, ErrorContext
from pool_indexer.core.events import TokenExchangeEvent
from pool_indexer.core.repository_protocols import EntityStoreLike
from pool_indexer.core.transaction_context import TransactionContext

logger = logging.getLogger(__name__)


def _check_asset_index(index: int, event: TokenExchangeEvent) -> None:
    if index not in (ASSET_A, ASSET_B):
        raise AssetIndexError(index, ErrorContext(
            tx_hash=event.coords.tx_hash,
            log_index=event.coords.log_index,
            event_kind=event.kind.value,
        ))


class SwapHandlers:
    """Reserve and volume accounting for token exchanges."""

    def __init__(
        self, store: EntityStoreLike, context: TransactionContext, settings: Settings,
    ):
        self.store = store
        self.context = context
        self.settings = settings

    async def handle_token_exchange(self, event: TokenExchangeEvent) -> None:
        _check_asset_index(event.sold_asset_index, event)
        _check_asset_index(event.bought_asset_index, event)
        await self.store.record_audit_entry(event)
        await self.apply_swap(event)

    async def apply_swap(self, event: TokenExchangeEvent) -> None:
        coords = event.coords
        sold, bought = event.sold_amount, event.bought_amount
        is_selling_a = event.sold_asset_index == ASSET_A

        pool = await self.store.get_or_create_pool(coords.contract_address, coords)
        if is_selling_a:
            pool.reserve_a = pool.reserve_a + sold
            pool.reserve_b = pool.reserve_b - bought
            amount_a, amount_b = sold, bought
        else:
            pool.reserve_a = pool.reserve_a - bought
            pool.reserve_b = pool.reserve_b + sold
            amount_a, amount_b = bought, sold
        pool.volume = pool.volume + sold + bought
        pool.updated_at = coords.block_timestamp
        await self.store.save(pool)
        await self.store.get_or_create_pool_snapshot(pool, coords)

        trader = await self.store.get_or_create_account(event.trader, pool, coords)
        trader.last_activity = coords.block_timestamp
        trader.tx_count = trader.tx_count + 1
        await self.store.save(trader)
        await self.store.get_or_create_account_snapshot(trader, pool, coords)

        await self.store.get_or_create_pool_transaction(
            trader, pool, coords, PoolTransactionType.SWAP,
            amount_a, amount_b, is_selling_a=is_selling_a,
        )
        logger.debug(
            f"Swap sold={sold} bought={bought} selling_a={is_selling_a}",
            extra={"tx_hash": coords.tx_hash, "log_index": coords.log_index},
        )
