"""Event Pipeline — one atomic, effectively-once unit of work per delivered event.

Invariants:
    - Events are applied one at a time (asyncio.Lock), in delivery order
    - Each event runs inside ONE database transaction: audit entry, aggregate
      mutations and historical records commit together or not at all
    - An event whose audit entry already exists is a DUPLICATE: nothing is re-applied
      (turns at-least-once delivery into effectively-once application)
    - A never-seen event at or behind the last applied (block, log index) raises
      EventOrderError: the pipeline never reorders
    - Only APPLIED events move the ordering cursor: an unknown event leaves no
      audit entry, so redelivering it yields UNKNOWN_EVENT again, never EventOrderError
    - On any failure the transaction rolls back, staged TransactionContext changes are
      discarded and the error propagates; the caller retries with the same event

Design Decisions:
    - Audit entry doubles as the processed-event marker: it is keyed by the same
      coordinates and written in the same transaction as the effects
    - Ordering cursor lazily seeded from the newest audit entry, so a restarted
      process keeps rejecting stale deliveries
"""

import asyncio
import logging
from typing import Iterable

from sqlalchemy import select

from pool_indexer.config import Settings, get_settings
from pool_indexer.core.domain_types import ProcessingOutcome
from pool_indexer.core.errors import ErrorContext, EventOrderError
from pool_indexer.core.events import PoolEvent
from pool_indexer.core.transaction_context import ReportedCondition, TransactionContext
from pool_indexer.infrastructure.database import DatabaseSessionManager
from pool_indexer.models.audit_entry import AuditEntry
from pool_indexer.services.entity_store import EntityStore
from pool_indexer.services.event_dispatch import EventDispatch

logger = logging.getLogger(__name__)


class EventPipeline:
    """Sequential, transactional event application."""

    def __init__(
        self, db_manager: DatabaseSessionManager, settings: Settings | None = None,
    ):
        self._db_manager = db_manager
        self.settings = settings or get_settings()
        self.context = TransactionContext(
            condition_limit=self.settings.reported_conditions_limit,
        )
        self._lock = asyncio.Lock()
        self._last_position: tuple[int, int] | None = None
        self._cursor_loaded = False

    @property
    def last_position(self) -> tuple[int, int] | None:
        return self._last_position

    @property
    def reported_conditions(self) -> list[ReportedCondition]:
        return list(self.context.reported_conditions)

    async def process(self, event: PoolEvent) -> ProcessingOutcome:
        async with self._lock:
            return await self._process(event)

    async def process_batch(
        self, events: Iterable[PoolEvent],
    ) -> list[ProcessingOutcome]:
        """Apply events in order; stops at (and raises) the first failure."""
        outcomes = []
        for event in events:
            outcomes.append(await self.process(event))
        return outcomes

    async def _process(self, event: PoolEvent) -> ProcessingOutcome:
        coords = event.coords
        log_extra = {
            "tx_hash": coords.tx_hash,
            "log_index": coords.log_index,
            "block_number": coords.block_number,
            "event_kind": event.kind.value if event.kind else type(event).__name__,
        }

        async with self._db_manager.session() as db:
            store = EntityStore(db, self.settings)
            if await store.has_audit_entry(coords):
                logger.info(
                    "Event already applied; skipping",
                    extra={**log_extra, "outcome": ProcessingOutcome.DUPLICATE.value},
                )
                return ProcessingOutcome.DUPLICATE

            if not self._cursor_loaded:
                await self._load_cursor(db)
            self._check_order(event)

            self.context.enter(coords.tx_hash)
            dispatch = EventDispatch(store, self.context, self.settings)
            try:
                outcome = await dispatch.execute(event)
                await db.commit()
            except Exception:
                self.context.discard_event()
                logger.error(
                    "Event processing failed; rolled back", extra=log_extra,
                )
                raise

        if outcome is ProcessingOutcome.APPLIED:
            self.context.commit_event(coords.log_index, event.kind)
            self._last_position = coords.position
        logger.debug("Event processed", extra={**log_extra, "outcome": outcome.value})
        return outcome

    async def _load_cursor(self, db) -> None:
        result = await db.execute(
            select(AuditEntry.block_number, AuditEntry.log_index)
            .order_by(AuditEntry.block_number.desc(), AuditEntry.log_index.desc())
            .limit(1)
        )
        row = result.first()
        if row is not None:
            self._last_position = (row.block_number, row.log_index)
        self._cursor_loaded = True

    def _check_order(self, event: PoolEvent) -> None:
        received = event.coords.position
        if self._last_position is not None and received <= self._last_position:
            raise EventOrderError(
                self._last_position, received,
                ErrorContext(
                    tx_hash=event.coords.tx_hash,
                    log_index=event.coords.log_index,
                    event_kind=event.kind.value if event.kind else None,
                ),
            )
