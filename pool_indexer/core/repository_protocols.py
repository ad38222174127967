"""Boundary Protocols — contracts between the accounting core and the persistence shell.

Invariants:
    - Handlers depend on EntityStoreLike, never on a concrete store
    - get_or_create is idempotent: same id, no intervening mutation -> equivalent
      state, no duplicate write
    - Implementations own the transaction boundary; handlers never commit

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: implementations do IO
"""

from typing import Any, Protocol, TypeVar

from pool_indexer.core.domain_types import Address, PoolTransactionType
from pool_indexer.core.events import EventCoordinates, PoolEvent

T = TypeVar("T")


class PoolLike(Protocol):
    """Structural contract for the Pool aggregate."""
    id: str
    reserve_a: int
    reserve_b: int
    total_supply: Any
    volume: int
    updated_at: int


class AccountLike(Protocol):
    """Structural contract for the Account aggregate."""
    id: str
    pool_id: str
    lp_balance: Any
    share_of_pool: Any
    last_activity: int
    tx_count: int


class EntityStoreLike(Protocol):
    """Contract for aggregate and history persistence — implemented by services.entity_store."""
    async def get_or_create(
        self, model: type[T], record_id: str, **defaults: object,
    ) -> T: ...
    async def load(self, model: type[T], record_id: str) -> T | None: ...
    async def save(self, record: object) -> None: ...

    async def get_or_create_pool(
        self, address: Address, coords: EventCoordinates,
    ) -> PoolLike: ...
    async def get_or_create_account(
        self, address: Address, pool: PoolLike, coords: EventCoordinates,
    ) -> AccountLike: ...
    async def list_pool_accounts(self, pool_id: str) -> list[AccountLike]: ...
    async def get_or_create_pool_snapshot(
        self, pool: PoolLike, coords: EventCoordinates,
    ) -> object: ...
    async def get_or_create_account_snapshot(
        self, account: AccountLike, pool: PoolLike, coords: EventCoordinates,
    ) -> object: ...
    async def get_or_create_pool_transaction(
        self,
        account: AccountLike,
        pool: PoolLike,
        coords: EventCoordinates,
        tx_type: PoolTransactionType,
        amount_a: int,
        amount_b: int,
        is_selling_a: bool | None = None,
    ) -> object: ...
    async def record_audit_entry(self, event: PoolEvent) -> object: ...
    async def has_audit_entry(self, coords: EventCoordinates) -> bool: ...
