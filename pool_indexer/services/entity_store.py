"""Entity Store — get-or-create / load / save over the pool indexer tables.

Invariants:
    - get_or_create(model, id) loads by primary key; if absent, constructs with the
      documented defaults, adds and flushes before returning
    - Calling get_or_create twice with the same id returns the same identity-mapped
      instance: no second INSERT (dedup guard against event re-delivery)
    - Historical records capture aggregate values at creation time and are never
      updated afterwards, even if the aggregate changes later in the same event
    - The store never commits: EventPipeline owns the per-event transaction

Design Decisions:
    - Thin wrapper over AsyncSession: session.get() consults the identity map first,
      so repeated lookups inside one event cost no round trip
    - flush() after add: a conflicting primary key surfaces inside the event's
      transaction instead of at commit time
"""

import logging
from decimal import Decimal
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pool_indexer.config import Settings, get_settings
from pool_indexer.core.domain_types import Address, PoolTransactionType
from pool_indexer.core.events import EventCoordinates, PoolEvent
from pool_indexer.core.identifiers import log_record_key, owned_record_key
from pool_indexer.models.account import Account
from pool_indexer.models.account_snapshot import AccountSnapshot
from pool_indexer.models.audit_entry import AuditEntry
from pool_indexer.models.pool import Pool
from pool_indexer.models.pool_snapshot import PoolSnapshot
from pool_indexer.models.pool_transaction import PoolTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityStore:
    """Persistence primitives for aggregates and write-once history."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # ─── Generic primitives ──────────────────────────────────────

    async def load(self, model: type[T], record_id: str) -> T | None:
        return await self.db.get(model, record_id)

    async def save(self, record: object) -> None:
        self.db.add(record)
        await self.db.flush()

    async def get_or_create(
        self, model: type[T], record_id: str, **defaults: object,
    ) -> T:
        """Load record_id, or persist a new record built from defaults."""
        record = await self.db.get(model, record_id)
        if record is None:
            record = model(id=record_id, **defaults)
            self.db.add(record)
            await self.db.flush()
            logger.debug(
                f"Created {model.__name__} {record_id}",
            )
        return record

    # ─── Aggregates ──────────────────────────────────────────────

    async def get_or_create_pool(
        self, address: Address, coords: EventCoordinates,
    ) -> Pool:
        return await self.get_or_create(
            Pool, address,
            name=self.settings.pool_name,
            reserve_a=0,
            reserve_b=0,
            total_supply=Decimal(0),
            volume=0,
            liquidity_added_a=Decimal(0),
            liquidity_added_b=Decimal(0),
            liquidity_removed_a=Decimal(0),
            liquidity_removed_b=Decimal(0),
            created_at=coords.block_timestamp,
            updated_at=coords.block_timestamp,
        )

    async def get_or_create_account(
        self, address: Address, pool: Pool, coords: EventCoordinates,
    ) -> Account:
        return await self.get_or_create(
            Account, address,
            pool_id=pool.id,
            lp_balance=Decimal(0),
            share_of_pool=Decimal(0),
            last_activity=coords.block_timestamp,
            tx_count=0,
        )

    async def list_pool_accounts(self, pool_id: str) -> list[Account]:
        result = await self.db.execute(
            select(Account).where(Account.pool_id == pool_id).order_by(Account.id)
        )
        return list(result.scalars().all())

    # ─── Write-once history ──────────────────────────────────────

    async def get_or_create_pool_snapshot(
        self, pool: Pool, coords: EventCoordinates,
    ) -> PoolSnapshot:
        snapshot_id = owned_record_key(
            pool.id, coords.block_number, coords.log_index,
        )
        return await self.get_or_create(
            PoolSnapshot, snapshot_id,
            pool_id=pool.id,
            tx_hash=coords.tx_hash,
            log_index=coords.log_index,
            block_number=coords.block_number,
            timestamp=coords.block_timestamp,
            reserve_a=pool.reserve_a,
            reserve_b=pool.reserve_b,
            total_supply=pool.total_supply,
            volume=pool.volume,
            liquidity_added_a=pool.liquidity_added_a,
            liquidity_added_b=pool.liquidity_added_b,
            liquidity_removed_a=pool.liquidity_removed_a,
            liquidity_removed_b=pool.liquidity_removed_b,
        )

    async def get_or_create_account_snapshot(
        self, account: Account, pool: Pool, coords: EventCoordinates,
    ) -> AccountSnapshot:
        snapshot_id = owned_record_key(
            account.id, coords.block_number, coords.log_index,
        )
        return await self.get_or_create(
            AccountSnapshot, snapshot_id,
            account_id=account.id,
            pool_id=pool.id,
            tx_hash=coords.tx_hash,
            log_index=coords.log_index,
            block_number=coords.block_number,
            timestamp=coords.block_timestamp,
            lp_balance=account.lp_balance,
            share_of_pool=account.share_of_pool,
        )

    async def get_or_create_pool_transaction(
        self,
        account: Account,
        pool: Pool,
        coords: EventCoordinates,
        tx_type: PoolTransactionType,
        amount_a: int,
        amount_b: int,
        is_selling_a: bool | None = None,
    ) -> PoolTransaction:
        return await self.get_or_create(
            PoolTransaction, log_record_key(coords.tx_hash, coords.log_index),
            account_id=account.id,
            pool_id=pool.id,
            type=tx_type.value,
            is_selling_a=is_selling_a,
            amount_a=amount_a,
            amount_b=amount_b,
            tx_hash=coords.tx_hash,
            log_index=coords.log_index,
            block_number=coords.block_number,
            timestamp=coords.block_timestamp,
            gas_used=0,
        )

    async def record_audit_entry(self, event: PoolEvent) -> AuditEntry:
        """Persist the raw event verbatim (step 1 of every handler)."""
        coords = event.coords
        return await self.get_or_create(
            AuditEntry, log_record_key(coords.tx_hash, coords.log_index),
            event_kind=event.kind.value,
            contract_address=coords.contract_address,
            tx_hash=coords.tx_hash,
            log_index=coords.log_index,
            block_number=coords.block_number,
            block_timestamp=coords.block_timestamp,
            params=event.params(),
        )

    async def has_audit_entry(self, coords: EventCoordinates) -> bool:
        key = log_record_key(coords.tx_hash, coords.log_index)
        return await self.db.get(AuditEntry, key) is not None
