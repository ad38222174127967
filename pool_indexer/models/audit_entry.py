"""AuditEntry ORM — verbatim record of every raw pool event.

Invariants:
    - id = tx hash || log index (core/identifiers.log_record_id)
    - One row per raw event, written before any aggregate effect, never updated
    - Row existence marks the event as applied (replay guard in EventPipeline)

Design Decisions:
    - Single table with JSON params over one table per event kind: parameter events
      need no schema of their own and the audit trail reads in one query
    - Big integers stored as decimal strings inside params (JSON numbers lose precision)
"""

from sqlalchemy import String, Integer, BigInteger, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base


class AuditEntry(Base):
    """Audit log entry — one per decoded event."""
    __tablename__ = "audit_entries"
    __table_args__ = (
        Index("ix_audit_entries_block_log", "block_number", "log_index"),
    )

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    event_kind: Mapped[str] = mapped_column(String(40), nullable=False)
    contract_address: Mapped[str] = mapped_column(String(42), nullable=False)
    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    block_timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    params: Mapped[dict] = mapped_column(JSON, nullable=False)
