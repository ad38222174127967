"""PoolTransaction ORM — one user-facing pool operation (swap or liquidity addition).

Invariants:
    - id = tx hash || log index (core/identifiers.log_record_id)
    - type is a PoolTransactionType value
    - is_selling_a set for swaps only (None otherwise)
    - amount_a / amount_b are raw token units moved for asset A / asset B

Design Decisions:
    - gas_used kept as a column but always 0: decoded events carry no receipt data
"""

from sqlalchemy import String, Integer, BigInteger, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base
from pool_indexer.db.types import BigInteger256


class PoolTransaction(Base):
    """Pool transaction record linked to both the pool and the acting account."""
    __tablename__ = "pool_transactions"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("accounts.id"), nullable=False,
    )
    pool_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("pools.id"), nullable=False,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_selling_a: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    amount_a: Mapped[int] = mapped_column(BigInteger256, nullable=False)
    amount_b: Mapped[int] = mapped_column(BigInteger256, nullable=False)
    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    gas_used: Mapped[int] = mapped_column(BigInteger256, nullable=False, default=0)
