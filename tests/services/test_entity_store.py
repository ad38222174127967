"""Entity Store — get-or-create idempotency, defaults and write-once history.

Tests cover:
    - get_or_create twice returns the same instance and inserts one row
    - Pool / Account defaults on first observation
    - Snapshots capture aggregate values at creation and ignore later changes
    - Audit entries keep params verbatim and mark the event as seen
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from pool_indexer.core.domain_types import PoolTransactionType
from pool_indexer.core.identifiers import log_record_key, owned_record_key
from pool_indexer.models import AuditEntry, Pool, PoolSnapshot, PoolTransaction
from tests.event_factory import ALICE, GENESIS_TIME, POOL, coords, transfer, ZERO


async def _rows(store, model):
    result = await store.db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_get_or_create_pool_is_idempotent(store):
    first = await store.get_or_create_pool(POOL, coords(1, 0))
    second = await store.get_or_create_pool(POOL, coords(2, 0))
    assert first is second
    assert await _rows(store, Pool) == 1


@pytest.mark.asyncio
async def test_new_pool_starts_empty(store, settings):
    pool = await store.get_or_create_pool(POOL, coords(3, 0))
    assert pool.name == settings.pool_name
    assert (pool.reserve_a, pool.reserve_b, pool.volume) == (0, 0, 0)
    assert pool.total_supply == Decimal(0)
    assert pool.liquidity_added_a == Decimal(0)
    assert pool.liquidity_removed_b == Decimal(0)
    assert pool.created_at == GENESIS_TIME + 36
    assert pool.updated_at == pool.created_at


@pytest.mark.asyncio
async def test_existing_pool_keeps_created_at(store):
    await store.get_or_create_pool(POOL, coords(1, 0))
    pool = await store.get_or_create_pool(POOL, coords(9, 0))
    assert pool.created_at == GENESIS_TIME + 12


@pytest.mark.asyncio
async def test_new_account_defaults(store):
    pool = await store.get_or_create_pool(POOL, coords(1, 0))
    account = await store.get_or_create_account(ALICE, pool, coords(1, 0))
    assert account.pool_id == POOL
    assert account.lp_balance == Decimal(0)
    assert account.share_of_pool == Decimal(0)
    assert account.tx_count == 0
    assert account.last_activity == GENESIS_TIME + 12


@pytest.mark.asyncio
async def test_pool_snapshot_is_write_once(store):
    at = coords(4, 2)
    pool = await store.get_or_create_pool(POOL, at)
    pool.reserve_a = 1000
    snapshot = await store.get_or_create_pool_snapshot(pool, at)

    pool.reserve_a = 5000
    again = await store.get_or_create_pool_snapshot(pool, at)

    assert again is snapshot
    assert snapshot.reserve_a == 1000
    assert snapshot.id == owned_record_key(POOL, 4, 2)
    assert await _rows(store, PoolSnapshot) == 1


@pytest.mark.asyncio
async def test_account_snapshot_captures_balance_and_share(store):
    at = coords(2, 0)
    pool = await store.get_or_create_pool(POOL, at)
    account = await store.get_or_create_account(ALICE, pool, at)
    account.lp_balance = Decimal(40)
    account.share_of_pool = Decimal("0.4")
    snapshot = await store.get_or_create_account_snapshot(account, pool, at)
    assert snapshot.id == owned_record_key(ALICE, 2, 0)
    assert snapshot.lp_balance == Decimal(40)
    assert snapshot.share_of_pool == Decimal("0.4")
    assert snapshot.tx_hash == at.tx_hash


@pytest.mark.asyncio
async def test_pool_transaction_keyed_by_log_record(store):
    at = coords(7, 3)
    pool = await store.get_or_create_pool(POOL, at)
    account = await store.get_or_create_account(ALICE, pool, at)
    record = await store.get_or_create_pool_transaction(
        account, pool, at, PoolTransactionType.SWAP, 100, 99, is_selling_a=True,
    )
    assert record.id == log_record_key(at.tx_hash, 3)
    assert record.type == "Swap"
    assert record.gas_used == 0
    assert await store.load(PoolTransaction, record.id) is record


@pytest.mark.asyncio
async def test_audit_entry_records_params_verbatim(store):
    event = transfer(5, 1, ZERO, ALICE, 10**24)
    entry = await store.record_audit_entry(event)
    assert entry.event_kind == "Transfer"
    assert entry.params["amount"] == str(10**24)
    assert entry.contract_address == POOL
    assert await store.has_audit_entry(event.coords)
    assert not await store.has_audit_entry(coords(5, 2))
    assert await _rows(store, AuditEntry) == 1
