"""Transaction Context — same-transaction memory for the two-phase LP supply protocol.

A StableSwap liquidity operation emits two logs in one chain transaction:
the LP Transfer (mint/burn, log N) followed by the liquidity event (log N+k).
Phase 1 (Transfer) moves the account balance while the pool's total supply is
still stale. Phase 2 (liquidity event) writes the authoritative total supply and
must recompute the share of every account phase 1 touched.

Invariants:
    - One context per chain transaction; reset() when a new tx_hash arrives
    - Staged changes become visible only after commit_event() (after the DB commit);
      discard_event() drops them when the event's DB transaction rolls back
    - reported_conditions keeps the newest condition_limit conditions, oldest dropped
      first; every condition is also logged at WARNING when it is staged

Design Decisions:
    - Explicit context object instead of relying on delivery order alone:
      handlers can see which accounts earlier logs of the same tx affected
    - Pure dataclass, no IO: owned by EventPipeline, read by handlers
"""

from collections import deque
from dataclasses import dataclass, field

from pool_indexer.core.domain_types import Address, EventKind, TxHash


@dataclass
class ReportedCondition:
    """Non-fatal accounting anomaly surfaced to operators."""
    code: str
    pool: Address
    tx_hash: TxHash
    log_index: int
    account: Address | None = None


@dataclass
class TransactionContext:
    """Events already applied for the current chain transaction."""

    tx_hash: TxHash | None = None
    seen_events: list[tuple[int, EventKind]] = field(default_factory=list)
    supply_changed_accounts: list[Address] = field(default_factory=list)
    condition_limit: int = 1000
    reported_conditions: deque[ReportedCondition] = field(init=False)

    # Pending for the event currently being applied
    _staged_accounts: list[Address] = field(default_factory=list)
    _staged_conditions: list[ReportedCondition] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.reported_conditions = deque(maxlen=self.condition_limit)

    def enter(self, tx_hash: TxHash) -> None:
        """Switch to tx_hash, forgetting the previous transaction's events."""
        if tx_hash != self.tx_hash:
            self.tx_hash = tx_hash
            self.seen_events = []
            self.supply_changed_accounts = []
        self.discard_event()

    def stage_supply_change(self, account: Address) -> None:
        """Record that an account's LP balance moved via mint or burn."""
        if account not in self._staged_accounts:
            self._staged_accounts.append(account)

    def stage_condition(self, condition: ReportedCondition) -> None:
        self._staged_conditions.append(condition)

    def commit_event(self, log_index: int, kind: EventKind) -> None:
        self.seen_events.append((log_index, kind))
        for account in self._staged_accounts:
            if account not in self.supply_changed_accounts:
                self.supply_changed_accounts.append(account)
        self.reported_conditions.extend(self._staged_conditions)
        self._staged_accounts = []
        self._staged_conditions = []

    def seen_in_transaction(self, tx_hash: TxHash, kind: EventKind) -> bool:
        """Whether an event of `kind` was applied earlier in chain transaction tx_hash."""
        return self.tx_hash == tx_hash and any(k is kind for _, k in self.seen_events)

    def discard_event(self) -> None:
        self._staged_accounts = []
        self._staged_conditions = []

    def accounts_pending_share(self) -> list[Address]:
        """Accounts whose share must be recomputed once total supply is authoritative."""
        pending = list(self.supply_changed_accounts)
        for account in self._staged_accounts:
            if account not in pending:
                pending.append(account)
        return pending
