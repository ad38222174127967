"""HTTP surface — ingest, read models, error envelopes and health checks."""

import pytest

from pool_indexer.core.identifiers import log_record_key

POOL = "0x" + "ab" * 20
ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20
ZERO = "0x" + "00" * 20


def _tx(n):
    return "0x" + f"{n:064x}"


def _event(kind, block, log, **fields):
    return {
        "kind": kind,
        "tx_hash": _tx(block),
        "log_index": log,
        "block_number": block,
        "block_timestamp": 1_700_000_000 + block * 12,
        "contract_address": POOL,
        **fields,
    }


SEED = [
    _event("Transfer", 1, 0, sender=ZERO, receiver=ALICE, amount="1000000"),
    _event(
        "AddLiquidity", 1, 1, provider=ALICE, amounts=["500", "500"],
        fees=["0", "0"], invariant="1000", new_total_supply="1000000",
    ),
]


@pytest.mark.asyncio
async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_readiness_checks_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


@pytest.mark.asyncio
async def test_conditions_empty_for_healthy_pool(client):
    await client.post("/api/v1/events", json={"events": SEED})
    body = (await client.get("/api/v1/health/conditions")).json()
    assert body == {"limit": 1000, "conditions": []}


@pytest.mark.asyncio
async def test_zero_supply_transfer_is_listed_in_conditions(client):
    await client.post("/api/v1/events", json={"events": [
        _event("Transfer", 1, 0, sender=ZERO, receiver=ALICE, amount="100"),
        _event("Transfer", 2, 0, sender=ALICE, receiver=BOB, amount="40"),
    ]})
    response = await client.get("/api/v1/health/conditions")
    assert response.status_code == 200
    conditions = response.json()["conditions"]
    assert [c["account"] for c in conditions] == [ALICE, BOB]
    assert {c["code"] for c in conditions} == {"ZERO_TOTAL_SUPPLY"}
    assert conditions[0]["tx_hash"] == _tx(2)
    assert conditions[0]["pool"] == POOL


@pytest.mark.asyncio
async def test_thirty_digit_balance_survives_the_api(client):
    await client.post("/api/v1/events", json={"events": [
        _event("Transfer", 1, 0, sender=ZERO, receiver=ALICE, amount=str(10**30)),
        _event("Transfer", 2, 0, sender=ZERO, receiver=ALICE, amount="1"),
    ]})
    account = (await client.get(f"/api/v1/accounts/{ALICE}")).json()
    assert account["lp_balance"] == str(10**30 + 1)


@pytest.mark.asyncio
async def test_ingest_then_read_pool_and_account(client):
    response = await client.post("/api/v1/events", json={"events": SEED})
    assert response.status_code == 200
    body = response.json()
    assert body["processed"] == 2
    assert [o["outcome"] for o in body["outcomes"]] == ["applied", "applied"]

    pool = (await client.get(f"/api/v1/pools/{POOL}")).json()
    assert pool["reserve_a"] == "500"
    assert pool["reserve_b"] == "500"
    assert pool["total_supply"] == "1000000"

    account = (await client.get(f"/api/v1/accounts/{ALICE}")).json()
    assert account["lp_balance"] == "1000000"
    assert account["share_of_pool"] == "1"
    assert account["tx_count"] == 1


@pytest.mark.asyncio
async def test_reposting_a_batch_reports_duplicates(client):
    await client.post("/api/v1/events", json={"events": SEED})
    response = await client.post("/api/v1/events", json={"events": SEED})
    assert [o["outcome"] for o in response.json()["outcomes"]] == [
        "duplicate", "duplicate",
    ]
    pool = (await client.get(f"/api/v1/pools/{POOL}")).json()
    assert pool["reserve_a"] == "500"


@pytest.mark.asyncio
async def test_swap_history_is_listed(client):
    await client.post("/api/v1/events", json={"events": SEED + [
        _event(
            "TokenExchange", 2, 0, trader=BOB, sold_asset_index=0,
            sold_amount="100", bought_asset_index=1, bought_amount="99",
        ),
    ]})
    transactions = (await client.get(f"/api/v1/pools/{POOL}/transactions")).json()
    assert [t["type"] for t in transactions] == ["Swap", "AddLiquidity"]
    assert transactions[0]["is_selling_a"] is True
    assert transactions[0]["amount_b"] == "99"

    snapshots = (await client.get(f"/api/v1/pools/{POOL}/snapshots")).json()
    assert snapshots[0]["reserve_a"] == "600"
    assert snapshots[0]["reserve_b"] == "401"
    assert snapshots[0]["volume"] == "199"


@pytest.mark.asyncio
async def test_account_snapshots_newest_first(client):
    await client.post("/api/v1/events", json={"events": SEED})
    snapshots = (await client.get(f"/api/v1/accounts/{ALICE}/snapshots")).json()
    assert [s["log_index"] for s in snapshots] == [1, 0]
    assert [s["share_of_pool"] for s in snapshots] == ["1", "0"]


@pytest.mark.asyncio
async def test_audit_entry_lookup(client):
    await client.post("/api/v1/events", json={"events": SEED})
    record_id = log_record_key(_tx(1), 1)
    entry = (await client.get(f"/api/v1/events/{record_id}")).json()
    assert entry["event_kind"] == "AddLiquidity"
    assert entry["params"]["amounts"] == ["500", "500"]


@pytest.mark.asyncio
async def test_stale_event_is_409(client):
    await client.post("/api/v1/events", json={"events": SEED})
    stale = _event("Transfer", 0, 5, sender=ALICE, receiver=BOB, amount="1")
    response = await client.post("/api/v1/events", json={"events": [stale]})
    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "EVENT_OUT_OF_ORDER"
    assert error["context"]["log_index"] == 5


@pytest.mark.asyncio
async def test_out_of_range_asset_index_is_400(client):
    bad = _event(
        "RemoveLiquidityOne", 1, 0, provider=ALICE, asset_index=2,
        withdrawn_amount="1", new_total_supply="1",
    )
    response = await client.post("/api/v1/events", json={"events": [bad]})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unknown_pool_is_404(client):
    response = await client.get(f"/api/v1/pools/{POOL.upper().replace('0X', '0x')}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_malformed_address_is_400(client):
    response = await client.get("/api/v1/accounts/0x1234")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MALFORMED_IDENTIFIER"


@pytest.mark.asyncio
async def test_missing_audit_entry_is_404(client):
    response = await client.get(f"/api/v1/events/{log_record_key(_tx(9), 0)}")
    assert response.status_code == 404
