"""Typed events — verbatim params, kinds and ordering keys."""

import dataclasses

import pytest

from pool_indexer.core.domain_types import EventKind
from tests.event_factory import (
    ALICE, ZERO, add_liquidity, coords, remove_one, swap, transfer,
)


def test_params_render_big_ints_as_strings():
    event = transfer(1, 0, ZERO, ALICE, 10**30)
    assert event.params() == {
        "sender": ZERO,
        "receiver": ALICE,
        "amount": str(10**30),
    }


def test_params_render_amount_vectors_as_lists():
    event = add_liquidity(1, 1, ALICE, [500, 700], 1200)
    params = event.params()
    assert params["amounts"] == ["500", "700"]
    assert params["new_total_supply"] == "1200"
    assert "coords" not in params


def test_exchange_kind_depends_on_underlying_flag():
    assert swap(1, 0, ALICE, 0, 10, 9).kind is EventKind.TOKEN_EXCHANGE
    assert (
        swap(1, 0, ALICE, 0, 10, 9, underlying=True).kind
        is EventKind.TOKEN_EXCHANGE_UNDERLYING
    )


def test_remove_one_keeps_lp_token_amount():
    event = remove_one(3, 2, ALICE, 1, 50, 950, lp_amount=49)
    assert event.kind is EventKind.REMOVE_LIQUIDITY_ONE
    assert event.params()["lp_token_amount"] == "49"


def test_position_orders_by_block_then_log_index():
    assert coords(5, 9).position < coords(6, 0).position
    assert coords(6, 0).position < coords(6, 1).position


def test_events_are_frozen():
    event = transfer(1, 0, ZERO, ALICE, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.amount = 2
