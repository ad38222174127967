"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Address and TxHash are lowercase 0x-prefixed hex strings
    - RecordKey is the 0x-hex rendering of an Identifier Builder byte id
    - Asset index 0 is asset A, 1 is asset B — no other value is valid
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Address = NewType("Address", str)
TxHash = NewType("TxHash", str)
RecordKey = NewType("RecordKey", str)


# ─── Constants ───────────────────────────────────────────────────

ZERO_ADDRESS = Address("0x" + "00" * 20)
ADDRESS_BYTES = 20
TX_HASH_BYTES = 32

ASSET_A = 0
ASSET_B = 1
ASSET_COUNT = 2


# ─── Enums ───────────────────────────────────────────────────────

class EventKind(str, Enum):
    """Pool event kinds — maps to AuditEntry.event_kind."""
    TRANSFER = "Transfer"
    TOKEN_EXCHANGE = "TokenExchange"
    TOKEN_EXCHANGE_UNDERLYING = "TokenExchangeUnderlying"
    ADD_LIQUIDITY = "AddLiquidity"
    REMOVE_LIQUIDITY = "RemoveLiquidity"
    REMOVE_LIQUIDITY_ONE = "RemoveLiquidityOne"
    REMOVE_LIQUIDITY_IMBALANCE = "RemoveLiquidityImbalance"
    RAMP_A = "RampA"
    STOP_RAMP_A = "StopRampA"
    APPLY_NEW_FEE = "ApplyNewFee"
    SET_NEW_MA_TIME = "SetNewMATime"


class TransferKind(str, Enum):
    """How a Transfer event is interpreted against the zero address."""
    MINT = "mint"
    BURN = "burn"
    TRANSFER = "transfer"


class PoolTransactionType(str, Enum):
    """PoolTransaction.type values."""
    SWAP = "Swap"
    ADD_LIQUIDITY = "AddLiquidity"


class ProcessingOutcome(str, Enum):
    """Result of pushing one event through the pipeline."""
    APPLIED = "applied"
    DUPLICATE = "duplicate"
    UNKNOWN_EVENT = "unknown_event"
