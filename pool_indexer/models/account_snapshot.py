"""AccountSnapshot ORM — an account's LP position immediately after one event.

Invariants:
    - id = account || block || log index (core/identifiers.owned_record_id)
    - At most one snapshot per (account, event); get_or_create is the dedup guard
    - Captured values never change after the first write
"""

from decimal import Decimal

from sqlalchemy import String, Integer, BigInteger, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base
from pool_indexer.db.types import ExactDecimal


class AccountSnapshot(Base):
    """Point-in-time copy of an account's LP position."""
    __tablename__ = "account_snapshots"
    __table_args__ = (
        Index(
            "ix_account_snapshots_account_block",
            "account_id", "block_number", "log_index",
        ),
    )

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("accounts.id"), nullable=False,
    )
    pool_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("pools.id"), nullable=False,
    )
    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    lp_balance: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    share_of_pool: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
