"""Share of Pool — pure derived-metric helper reused by transfer and liquidity handlers.

Invariants:
    - share = lp_balance / total_supply when total_supply > 0
    - share = 0 when total_supply == 0, and the result is flagged zero_supply=True
      so the caller can report the condition (never silently ignored)
    - Division runs in a 34-significant-digit decimal context, independent of the
      process-wide decimal context

Design Decisions:
    - Returns a flagged value instead of raising: keeps the accumulator live on a
      degenerate pool; the caller decides between reporting and halting
    - Negative total supply is treated like zero (no ratio is meaningful)
"""

from decimal import Decimal, Context, ROUND_HALF_EVEN
from typing import NamedTuple

SHARE_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)
ZERO = Decimal(0)


class ShareOfPool(NamedTuple):
    value: Decimal
    zero_supply: bool


def compute_share_of_pool(lp_balance: Decimal, total_supply: Decimal) -> ShareOfPool:
    """Fraction of LP supply held by one account."""
    if total_supply > ZERO:
        return ShareOfPool(SHARE_CONTEXT.divide(lp_balance, total_supply), False)
    return ShareOfPool(ZERO, True)
