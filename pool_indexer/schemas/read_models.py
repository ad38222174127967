"""Read-Model Schemas — public views of aggregates and history.

Invariants:
    - Decimals and uint256 values serialize as strings (no float precision loss)
    - Built from ORM rows via from_attributes; never written back

Design Decisions:
    - One response model per table; the API does not invent derived fields
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

BigIntStr = Annotated[int, PlainSerializer(str, return_type=str)]
DecimalStr = Annotated[Decimal, PlainSerializer(str, return_type=str)]


class PoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    reserve_a: BigIntStr
    reserve_b: BigIntStr
    total_supply: DecimalStr
    volume: BigIntStr
    liquidity_added_a: DecimalStr
    liquidity_added_b: DecimalStr
    liquidity_removed_a: DecimalStr
    liquidity_removed_b: DecimalStr
    created_at: int
    updated_at: int


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    pool_id: str
    lp_balance: DecimalStr
    share_of_pool: DecimalStr
    last_activity: int
    tx_count: int


class PoolSnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tx_hash: str
    log_index: int
    block_number: int
    timestamp: int
    reserve_a: BigIntStr
    reserve_b: BigIntStr
    total_supply: DecimalStr
    volume: BigIntStr


class AccountSnapshotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    tx_hash: str
    log_index: int
    block_number: int
    timestamp: int
    lp_balance: DecimalStr
    share_of_pool: DecimalStr


class PoolTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    type: str
    is_selling_a: bool | None
    amount_a: BigIntStr
    amount_b: BigIntStr
    tx_hash: str
    log_index: int
    block_number: int
    timestamp: int


class AuditEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_kind: str
    contract_address: str
    tx_hash: str
    log_index: int
    block_number: int
    block_timestamp: int
    params: dict


class ReportedConditionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    pool: str
    tx_hash: str
    log_index: int
    account: str | None


class ReportedConditionsResponse(BaseModel):
    """Newest conditions the running pipeline kept, oldest first."""
    limit: int
    conditions: list[ReportedConditionResponse]
