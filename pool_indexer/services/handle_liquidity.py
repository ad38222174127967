"""Liquidity Handlers — AddLiquidity, RemoveLiquidity, RemoveLiquidityImbalance, RemoveLiquidityOne.

Invariants:
    - Audit entry persisted first
    - Add: reserve[i] += amounts[i], liquidity_added[i] += amounts[i]
    - Remove / Imbalance: reserve[i] -= amounts[i], liquidity_removed[i] += amounts[i]
    - RemoveOne: amounts = withdrawn coin amount at asset_index, 0 elsewhere, then Remove
    - total_supply = new_total_supply from the event (authoritative, never derived)
    - Provider: last_activity, tx_count += 1, share recomputed with the JUST-UPDATED supply
    - Every account minted/burned earlier in the same chain tx gets its share recomputed
      too (phase 2 of the two-phase protocol), each with its own AccountSnapshot
    - Every other account of the pool is re-derived against the new supply as well
      (share only, no snapshot): total_supply changes only here, so after a
      liquidity event every share matches balance / supply
    - A liquidity event with no LP Transfer applied earlier in its chain transaction
      is applied anyway, logged at WARNING with error_code UNPAIRED_LIQUIDITY_EVENT
      and kept as a ReportedCondition
    - AddLiquidity also writes an AddLiquidity PoolTransaction

Design Decisions:
    - Removal PoolTransaction records are not written: the per-operation history was
      never defined for removals; snapshots carry the removal effect
    - Bystander re-derivation reads every account of the pool, O(accounts) per
      liquidity event; only accounts whose share actually moves are assigned, so
      unchanged rows (zero balances, repeated supplies) produce no UPDATE
"""

import logging
from decimal import Decimal

from pool_indexer.config import Settings
from pool_indexer.core.domain_types import (
    ASSET_A, ASSET_B, ASSET_COUNT, EventKind, PoolTransactionType,
)
from pool_indexer.core.errors import AssetIndexError, ErrorContext
from pool_indexer.core.events import (
    AddLiquidityEvent,
    PoolEvent,
    RemoveLiquidityEvent,
    RemoveLiquidityImbalanceEvent,
    RemoveLiquidityOneEvent,
)
from pool_indexer.core.exact_amounts import add_amount
from pool_indexer.core.repository_protocols import EntityStoreLike, PoolLike
from pool_indexer.core.share_of_pool import compute_share_of_pool
from pool_indexer.core.transaction_context import ReportedCondition, TransactionContext
from pool_indexer.services.refresh_share import refresh_share_of_pool

logger = logging.getLogger(__name__)

UNPAIRED_LIQUIDITY_EVENT = "UNPAIRED_LIQUIDITY_EVENT"


def single_asset_amounts(asset_index: int, amount: int) -> tuple[int, int]:
    """Two-element amount vector with `amount` at asset_index, zero elsewhere."""
    amounts = [0] * ASSET_COUNT
    amounts[asset_index] = amount
    return tuple(amounts)


class LiquidityHandlers:
    """Reserve, supply and share accounting for liquidity provision."""

    def __init__(
        self, store: EntityStoreLike, context: TransactionContext, settings: Settings,
    ):
        self.store = store
        self.context = context
        self.settings = settings

    async def handle_add_liquidity(self, event: AddLiquidityEvent) -> None:
        await self.store.record_audit_entry(event)
        coords = event.coords
        amount_a, amount_b = event.amounts

        pool = await self.store.get_or_create_pool(coords.contract_address, coords)
        pool.reserve_a = pool.reserve_a + amount_a
        pool.reserve_b = pool.reserve_b + amount_b
        pool.liquidity_added_a = add_amount(pool.liquidity_added_a, amount_a)
        pool.liquidity_added_b = add_amount(pool.liquidity_added_b, amount_b)
        pool.total_supply = Decimal(event.new_total_supply)
        pool.updated_at = coords.block_timestamp
        await self.store.save(pool)
        await self.store.get_or_create_pool_snapshot(pool, coords)

        provider = await self._settle_provider(event, pool)
        await self.store.get_or_create_pool_transaction(
            provider, pool, coords, PoolTransactionType.ADD_LIQUIDITY,
            amount_a, amount_b,
        )

    async def handle_remove_liquidity(self, event: RemoveLiquidityEvent) -> None:
        await self.store.record_audit_entry(event)
        await self.apply_removal(event, event.amounts)

    async def handle_remove_liquidity_imbalance(
        self, event: RemoveLiquidityImbalanceEvent,
    ) -> None:
        await self.store.record_audit_entry(event)
        await self.apply_removal(event, event.amounts)

    async def handle_remove_liquidity_one(self, event: RemoveLiquidityOneEvent) -> None:
        if event.asset_index not in (ASSET_A, ASSET_B):
            raise AssetIndexError(event.asset_index, ErrorContext(
                tx_hash=event.coords.tx_hash,
                log_index=event.coords.log_index,
                event_kind=event.kind.value,
            ))
        await self.store.record_audit_entry(event)
        await self.apply_removal(
            event, single_asset_amounts(event.asset_index, event.withdrawn_amount),
        )

    async def apply_removal(
        self, event: PoolEvent, amounts: tuple[int, int],
    ) -> None:
        coords = event.coords
        amount_a, amount_b = amounts

        pool = await self.store.get_or_create_pool(coords.contract_address, coords)
        pool.reserve_a = pool.reserve_a - amount_a
        pool.reserve_b = pool.reserve_b - amount_b
        pool.liquidity_removed_a = add_amount(pool.liquidity_removed_a, amount_a)
        pool.liquidity_removed_b = add_amount(pool.liquidity_removed_b, amount_b)
        pool.total_supply = Decimal(event.new_total_supply)
        pool.updated_at = coords.block_timestamp
        await self.store.save(pool)
        await self.store.get_or_create_pool_snapshot(pool, coords)

        await self._settle_provider(event, pool)

    async def _settle_provider(self, event: PoolEvent, pool: PoolLike):
        """Provider bookkeeping plus share recomputation for every supply-changed account."""
        coords = event.coords
        provider = await self.store.get_or_create_account(event.provider, pool, coords)
        provider.last_activity = coords.block_timestamp
        provider.tx_count = provider.tx_count + 1
        if not self.context.seen_in_transaction(coords.tx_hash, EventKind.TRANSFER):
            self._report_unpaired(event, pool)

        pending = [provider.id] + [
            a for a in self.context.accounts_pending_share() if a != provider.id
        ]
        for address in pending:
            account = await self.store.get_or_create_account(address, pool, coords)
            refresh_share_of_pool(account, pool, event, self.context, self.settings)
            await self.store.save(account)
            await self.store.get_or_create_account_snapshot(account, pool, coords)

        for account in await self.store.list_pool_accounts(pool.id):
            if account.id in pending:
                continue
            share = compute_share_of_pool(account.lp_balance, pool.total_supply).value
            if share != account.share_of_pool:
                account.share_of_pool = share

        logger.debug(
            f"{event.kind.value}: supply={pool.total_supply} "
            f"reserves=({pool.reserve_a}, {pool.reserve_b})",
            extra={"tx_hash": coords.tx_hash, "log_index": coords.log_index},
        )
        return provider

    def _report_unpaired(self, event: PoolEvent, pool: PoolLike) -> None:
        coords = event.coords
        logger.warning(
            f"{event.kind.value} without an LP Transfer earlier in its transaction",
            extra={
                "error_code": UNPAIRED_LIQUIDITY_EVENT,
                "pool": pool.id,
                "account": event.provider,
                "tx_hash": coords.tx_hash,
                "log_index": coords.log_index,
            },
        )
        self.context.stage_condition(ReportedCondition(
            code=UNPAIRED_LIQUIDITY_EVENT,
            pool=pool.id,
            tx_hash=coords.tx_hash,
            log_index=coords.log_index,
            account=event.provider,
        ))
