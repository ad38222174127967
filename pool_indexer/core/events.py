"""Typed Pool Events — decoded StableSwap-NG log records as immutable dataclasses.

Invariants:
    - Every event carries EventCoordinates (tx hash, log index, block, timestamp, contract)
    - Token amounts are non-negative ints (uint256 on chain); decoding is done upstream
    - Events are frozen: handlers never mutate their input
    - params() returns the event's own parameters verbatim, big ints as decimal strings
      (stored in AuditEntry.params)

Design Decisions:
    - One dataclass per event kind, matching the contract ABI field set
    - TokenExchange and TokenExchangeUnderlying share a class, distinguished by `underlying`
    - RemoveLiquidityOne keeps both the LP-token amount burned and the coin amount withdrawn
"""

from dataclasses import dataclass, fields

from pool_indexer.core.domain_types import Address, EventKind, TxHash


@dataclass(frozen=True)
class EventCoordinates:
    """Position of a log record in the append-only chain log."""
    tx_hash: TxHash
    log_index: int
    block_number: int
    block_timestamp: int
    contract_address: Address

    @property
    def position(self) -> tuple[int, int]:
        """Total order key within the chain: (block, log index)."""
        return (self.block_number, self.log_index)


def _verbatim(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, tuple):
        return [_verbatim(v) for v in value]
    return value


@dataclass(frozen=True)
class PoolEvent:
    """Base for all decoded pool events."""
    coords: EventCoordinates

    kind = None  # overridden per subclass

    def params(self) -> dict:
        return {
            f.name: _verbatim(getattr(self, f.name))
            for f in fields(self) if f.name != "coords"
        }


@dataclass(frozen=True)
class TransferEvent(PoolEvent):
    sender: Address
    receiver: Address
    amount: int

    kind = EventKind.TRANSFER


@dataclass(frozen=True)
class TokenExchangeEvent(PoolEvent):
    trader: Address
    sold_asset_index: int
    sold_amount: int
    bought_asset_index: int
    bought_amount: int
    underlying: bool = False

    @property
    def kind(self) -> EventKind:
        if self.underlying:
            return EventKind.TOKEN_EXCHANGE_UNDERLYING
        return EventKind.TOKEN_EXCHANGE


@dataclass(frozen=True)
class AddLiquidityEvent(PoolEvent):
    provider: Address
    amounts: tuple[int, int]
    fees: tuple[int, int]
    invariant: int
    new_total_supply: int

    kind = EventKind.ADD_LIQUIDITY


@dataclass(frozen=True)
class RemoveLiquidityEvent(PoolEvent):
    provider: Address
    amounts: tuple[int, int]
    fees: tuple[int, int]
    new_total_supply: int

    kind = EventKind.REMOVE_LIQUIDITY


@dataclass(frozen=True)
class RemoveLiquidityImbalanceEvent(PoolEvent):
    provider: Address
    amounts: tuple[int, int]
    fees: tuple[int, int]
    invariant: int
    new_total_supply: int

    kind = EventKind.REMOVE_LIQUIDITY_IMBALANCE


@dataclass(frozen=True)
class RemoveLiquidityOneEvent(PoolEvent):
    provider: Address
    asset_index: int
    withdrawn_amount: int
    new_total_supply: int
    lp_token_amount: int = 0

    kind = EventKind.REMOVE_LIQUIDITY_ONE


# ─── Parameter changes (audit only) ──────────────────────────────

@dataclass(frozen=True)
class RampAEvent(PoolEvent):
    old_a: int
    new_a: int
    initial_time: int
    future_time: int

    kind = EventKind.RAMP_A


@dataclass(frozen=True)
class StopRampAEvent(PoolEvent):
    a: int
    t: int

    kind = EventKind.STOP_RAMP_A


@dataclass(frozen=True)
class ApplyNewFeeEvent(PoolEvent):
    fee: int
    offpeg_fee_multiplier: int

    kind = EventKind.APPLY_NEW_FEE


@dataclass(frozen=True)
class SetNewMATimeEvent(PoolEvent):
    ma_exp_time: int
    d_ma_time: int

    kind = EventKind.SET_NEW_MA_TIME
