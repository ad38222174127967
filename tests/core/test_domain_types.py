"""Domain Types — enum values are the wire/storage strings."""

from pool_indexer.core.domain_types import (
    ZERO_ADDRESS, EventKind, PoolTransactionType, ProcessingOutcome,
)


def test_zero_address_is_twenty_zero_bytes():
    assert ZERO_ADDRESS == "0x" + "0" * 40


def test_event_kinds_match_contract_event_names():
    assert {k.value for k in EventKind} == {
        "Transfer", "TokenExchange", "TokenExchangeUnderlying",
        "AddLiquidity", "RemoveLiquidity", "RemoveLiquidityOne",
        "RemoveLiquidityImbalance", "RampA", "StopRampA",
        "ApplyNewFee", "SetNewMATime",
    }


def test_pool_transaction_types():
    assert PoolTransactionType.SWAP == "Swap"
    assert PoolTransactionType.ADD_LIQUIDITY == "AddLiquidity"


def test_processing_outcome_serializes_as_string():
    assert ProcessingOutcome.DUPLICATE.value == "duplicate"
