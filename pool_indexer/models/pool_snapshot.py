"""PoolSnapshot ORM — pool state immediately after one swap or liquidity event.

Invariants:
    - id = pool || block || log index (core/identifiers.owned_record_id)
    - Written once by get_or_create; a replayed event finds the existing row
"""

from decimal import Decimal

from sqlalchemy import String, Integer, BigInteger, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base
from pool_indexer.db.types import BigInteger256, ExactDecimal


class PoolSnapshot(Base):
    """Point-in-time copy of the pool aggregate."""
    __tablename__ = "pool_snapshots"
    __table_args__ = (
        Index("ix_pool_snapshots_pool_block", "pool_id", "block_number", "log_index"),
    )

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    pool_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("pools.id"), nullable=False,
    )
    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

    reserve_a: Mapped[int] = mapped_column(BigInteger256, nullable=False)
    reserve_b: Mapped[int] = mapped_column(BigInteger256, nullable=False)
    total_supply: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    volume: Mapped[int] = mapped_column(BigInteger256, nullable=False)
    liquidity_added_a: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    liquidity_added_b: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    liquidity_removed_a: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    liquidity_removed_b: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
