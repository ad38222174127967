"""Transaction Context — staging and visibility rules of the two-phase LP protocol."""

from pool_indexer.core.domain_types import EventKind
from pool_indexer.core.transaction_context import ReportedCondition, TransactionContext

TX_1 = "0x" + "01" * 32
TX_2 = "0x" + "02" * 32
ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20


def test_staged_account_is_pending_before_commit():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    assert ctx.accounts_pending_share() == [ALICE]
    assert ctx.supply_changed_accounts == []


def test_commit_moves_staged_accounts_into_transaction_memory():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    ctx.commit_event(0, EventKind.TRANSFER)
    assert ctx.supply_changed_accounts == [ALICE]
    assert ctx.seen_events == [(0, EventKind.TRANSFER)]


def test_discard_drops_staged_changes():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    ctx.discard_event()
    assert ctx.accounts_pending_share() == []


def test_new_transaction_forgets_previous_accounts():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    ctx.commit_event(0, EventKind.TRANSFER)
    ctx.enter(TX_2)
    assert ctx.accounts_pending_share() == []
    assert ctx.seen_events == []


def test_reentering_same_transaction_keeps_memory():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    ctx.commit_event(0, EventKind.TRANSFER)
    ctx.enter(TX_1)
    ctx.stage_supply_change(BOB)
    assert ctx.accounts_pending_share() == [ALICE, BOB]


def test_accounts_are_not_duplicated():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    ctx.stage_supply_change(ALICE)
    ctx.commit_event(0, EventKind.TRANSFER)
    ctx.enter(TX_1)
    ctx.stage_supply_change(ALICE)
    assert ctx.accounts_pending_share() == [ALICE]


def test_reported_conditions_survive_transaction_changes():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_condition(ReportedCondition("ZERO_TOTAL_SUPPLY", "0xpool", TX_1, 3))
    ctx.commit_event(3, EventKind.TRANSFER)
    ctx.enter(TX_2)
    assert [c.code for c in ctx.reported_conditions] == ["ZERO_TOTAL_SUPPLY"]


def test_discarded_conditions_are_not_reported():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.stage_condition(ReportedCondition("ZERO_TOTAL_SUPPLY", "0xpool", TX_1, 3))
    ctx.discard_event()
    ctx.commit_event(4, EventKind.RAMP_A)
    assert list(ctx.reported_conditions) == []


def test_reported_conditions_drop_the_oldest_past_the_limit():
    ctx = TransactionContext(condition_limit=2)
    for log_index in range(3):
        ctx.enter(TX_1)
        ctx.stage_condition(
            ReportedCondition("ZERO_TOTAL_SUPPLY", "0xpool", TX_1, log_index),
        )
        ctx.commit_event(log_index, EventKind.TRANSFER)
    assert [c.log_index for c in ctx.reported_conditions] == [1, 2]


def test_seen_in_transaction_tracks_committed_kinds():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.commit_event(0, EventKind.TRANSFER)
    assert ctx.seen_in_transaction(TX_1, EventKind.TRANSFER)
    assert not ctx.seen_in_transaction(TX_1, EventKind.ADD_LIQUIDITY)
    assert not ctx.seen_in_transaction(TX_2, EventKind.TRANSFER)


def test_seen_in_transaction_forgets_previous_transaction():
    ctx = TransactionContext()
    ctx.enter(TX_1)
    ctx.commit_event(0, EventKind.TRANSFER)
    ctx.enter(TX_2)
    assert not ctx.seen_in_transaction(TX_2, EventKind.TRANSFER)
    assert not ctx.seen_in_transaction(TX_1, EventKind.TRANSFER)
