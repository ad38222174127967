"""Account ORM — one LP participant of the pool.

Invariants:
    - id is the participant address; pool_id set at first observation, never changed
    - lp_balance moves only through Transfer events (mint / burn / transfer)
    - lp_balance may go negative: the ledger records what happened, not whether it was valid
    - share_of_pool = lp_balance / pool.total_supply, 0 when supply is 0
    - tx_count counts swap and liquidity actions, never transfers

Design Decisions:
    - Keyed by address alone: the indexer tracks a single pool per deployment
"""

from decimal import Decimal

from sqlalchemy import String, Integer, BigInteger, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from pool_indexer.db.base import Base
from pool_indexer.db.types import ExactDecimal


class Account(Base):
    """Account aggregate — LP balance and share of pool."""
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(42), primary_key=True)
    pool_id: Mapped[str] = mapped_column(
        String(42), ForeignKey("pools.id"), nullable=False,
    )
    lp_balance: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    share_of_pool: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False, default=Decimal(0),
    )
    last_activity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    tx_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
