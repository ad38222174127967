"""Event Payload Schemas — decoded pool events as accepted by POST /api/v1/events.

Invariants:
    - `kind` discriminates the payload; unknown kinds are rejected with 422/400
    - Addresses and tx hashes are validated and normalized to lowercase 0x hex
    - Amounts are non-negative ints; uint256 values may arrive as decimal strings
    - Asset indexes are constrained to {0, 1} at this boundary
    - to_event() returns the frozen core dataclass; nothing downstream sees pydantic

Design Decisions:
    - Literal discriminator over a kind->class registry: Pydantic handles dispatch natively
    - Big ints accepted as strings: JSON numbers above 2**53 are unsafe in most clients
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter, field_validator

from pool_indexer.core.events import (
    AddLiquidityEvent,
    ApplyNewFeeEvent,
    EventCoordinates,
    PoolEvent,
    RampAEvent,
    RemoveLiquidityEvent,
    RemoveLiquidityImbalanceEvent,
    RemoveLiquidityOneEvent,
    SetNewMATimeEvent,
    StopRampAEvent,
    TokenExchangeEvent,
    TransferEvent,
)
from pool_indexer.core.errors import IdentifierError
from pool_indexer.core.identifiers import normalize_address, normalize_tx_hash


def _to_int(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return value


def _to_address(value: object) -> object:
    if isinstance(value, str):
        try:
            return normalize_address(value)
        except IdentifierError as e:
            raise ValueError(e.message)
    return value


Uint = Annotated[int, BeforeValidator(_to_int), Field(ge=0)]
AssetIndex = Literal[0, 1]
AddressStr = Annotated[str, BeforeValidator(_to_address)]


class EventPayload(BaseModel):
    """Coordinates shared by every decoded event."""
    tx_hash: str
    log_index: int = Field(ge=0, lt=2**32)
    block_number: int = Field(ge=0, lt=2**64)
    block_timestamp: int = Field(ge=0)
    contract_address: AddressStr

    @field_validator("tx_hash", mode="before")
    @classmethod
    def normalize_hash(cls, v: object) -> object:
        if isinstance(v, str):
            try:
                return normalize_tx_hash(v)
            except IdentifierError as e:
                raise ValueError(e.message)
        return v

    def coords(self) -> EventCoordinates:
        return EventCoordinates(
            tx_hash=self.tx_hash,
            log_index=self.log_index,
            block_number=self.block_number,
            block_timestamp=self.block_timestamp,
            contract_address=self.contract_address,
        )


class TransferPayload(EventPayload):
    kind: Literal["Transfer"]
    sender: AddressStr
    receiver: AddressStr
    amount: Uint

    def to_event(self) -> PoolEvent:
        return TransferEvent(
            self.coords(), sender=self.sender, receiver=self.receiver,
            amount=self.amount,
        )


class TokenExchangePayload(EventPayload):
    kind: Literal["TokenExchange", "TokenExchangeUnderlying"]
    trader: AddressStr
    sold_asset_index: AssetIndex
    sold_amount: Uint
    bought_asset_index: AssetIndex
    bought_amount: Uint

    def to_event(self) -> PoolEvent:
        return TokenExchangeEvent(
            self.coords(),
            trader=self.trader,
            sold_asset_index=self.sold_asset_index,
            sold_amount=self.sold_amount,
            bought_asset_index=self.bought_asset_index,
            bought_amount=self.bought_amount,
            underlying=self.kind == "TokenExchangeUnderlying",
        )


class AddLiquidityPayload(EventPayload):
    kind: Literal["AddLiquidity"]
    provider: AddressStr
    amounts: tuple[Uint, Uint]
    fees: tuple[Uint, Uint]
    invariant: Uint
    new_total_supply: Uint

    def to_event(self) -> PoolEvent:
        return AddLiquidityEvent(
            self.coords(), provider=self.provider, amounts=self.amounts,
            fees=self.fees, invariant=self.invariant,
            new_total_supply=self.new_total_supply,
        )


class RemoveLiquidityPayload(EventPayload):
    kind: Literal["RemoveLiquidity"]
    provider: AddressStr
    amounts: tuple[Uint, Uint]
    fees: tuple[Uint, Uint]
    new_total_supply: Uint

    def to_event(self) -> PoolEvent:
        return RemoveLiquidityEvent(
            self.coords(), provider=self.provider, amounts=self.amounts,
            fees=self.fees, new_total_supply=self.new_total_supply,
        )


class RemoveLiquidityImbalancePayload(EventPayload):
    kind: Literal["RemoveLiquidityImbalance"]
    provider: AddressStr
    amounts: tuple[Uint, Uint]
    fees: tuple[Uint, Uint]
    invariant: Uint
    new_total_supply: Uint

    def to_event(self) -> PoolEvent:
        return RemoveLiquidityImbalanceEvent(
            self.coords(), provider=self.provider, amounts=self.amounts,
            fees=self.fees, invariant=self.invariant,
            new_total_supply=self.new_total_supply,
        )


class RemoveLiquidityOnePayload(EventPayload):
    kind: Literal["RemoveLiquidityOne"]
    provider: AddressStr
    asset_index: AssetIndex
    withdrawn_amount: Uint
    new_total_supply: Uint
    lp_token_amount: Uint = 0

    def to_event(self) -> PoolEvent:
        return RemoveLiquidityOneEvent(
            self.coords(), provider=self.provider, asset_index=self.asset_index,
            withdrawn_amount=self.withdrawn_amount,
            new_total_supply=self.new_total_supply,
            lp_token_amount=self.lp_token_amount,
        )


class RampAPayload(EventPayload):
    kind: Literal["RampA"]
    old_a: Uint
    new_a: Uint
    initial_time: Uint
    future_time: Uint

    def to_event(self) -> PoolEvent:
        return RampAEvent(
            self.coords(), old_a=self.old_a, new_a=self.new_a,
            initial_time=self.initial_time, future_time=self.future_time,
        )


class StopRampAPayload(EventPayload):
    kind: Literal["StopRampA"]
    a: Uint
    t: Uint

    def to_event(self) -> PoolEvent:
        return StopRampAEvent(self.coords(), a=self.a, t=self.t)


class ApplyNewFeePayload(EventPayload):
    kind: Literal["ApplyNewFee"]
    fee: Uint
    offpeg_fee_multiplier: Uint

    def to_event(self) -> PoolEvent:
        return ApplyNewFeeEvent(
            self.coords(), fee=self.fee,
            offpeg_fee_multiplier=self.offpeg_fee_multiplier,
        )


class SetNewMATimePayload(EventPayload):
    kind: Literal["SetNewMATime"]
    ma_exp_time: Uint
    d_ma_time: Uint

    def to_event(self) -> PoolEvent:
        return SetNewMATimeEvent(
            self.coords(), ma_exp_time=self.ma_exp_time, d_ma_time=self.d_ma_time,
        )


AnyEventPayload = Annotated[
    Union[
        TransferPayload,
        TokenExchangePayload,
        AddLiquidityPayload,
        RemoveLiquidityPayload,
        RemoveLiquidityImbalancePayload,
        RemoveLiquidityOnePayload,
        RampAPayload,
        StopRampAPayload,
        ApplyNewFeePayload,
        SetNewMATimePayload,
    ],
    Field(discriminator="kind"),
]

event_payload_adapter = TypeAdapter(AnyEventPayload)


class EventBatch(BaseModel):
    """Ordered batch of decoded events; order is delivery order."""
    events: list[AnyEventPayload] = Field(min_length=1, max_length=10_000)


class EventOutcome(BaseModel):
    tx_hash: str
    log_index: int
    kind: str
    outcome: str


class EventBatchResponse(BaseModel):
    processed: int
    outcomes: list[EventOutcome]
