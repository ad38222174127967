"""Pool ORM — canonical aggregate for one deployed StableSwap pool contract.

Invariants:
    - id is the contract address (lowercase 0x hex)
    - reserve_a / reserve_b start at 0 and change only through swap and liquidity accounting
    - total_supply is written only by liquidity events (authoritative value from the log)
    - volume is monotonically non-decreasing
    - created_at / updated_at are block timestamps (unix seconds), not wall-clock

Design Decisions:
    - Exact text-backed numerics (db/types.py): reserves are uint256 token units
    - No ORM relationships: history tables are queried explicitly, never lazy-loaded
"""

from decimal import Decimal

from sqlalchemy import String, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base
from pool_indexer.db.types import BigInteger256, ExactDecimal


class Pool(Base):
    """Pool aggregate — reserves, LP supply, volume and liquidity totals."""
    __tablename__ = "pools"

    id: Mapped[str] = mapped_column(String(42), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    reserve_a: Mapped[int] = mapped_column(BigInteger256, nullable=False, default=0)
    reserve_b: Mapped[int] = mapped_column(BigInteger256, nullable=False, default=0)
    total_supply: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    volume: Mapped[int] = mapped_column(BigInteger256, nullable=False, default=0)

    # Cumulative liquidity per asset
    liquidity_added_a: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    liquidity_added_b: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    liquidity_removed_a: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    liquidity_removed_b: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )

    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
