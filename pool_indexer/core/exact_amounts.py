"""Exact Amounts — lossless running totals for uint256 token quantities.

Invariants:
    - add_amount / subtract_amount never round: integral operands of any size give
      the exact integral result
    - Independent of the process-wide decimal context (default keeps 28 digits)

Design Decisions:
    - One module-level Context at MAX_PREC: LP balances and cumulative liquidity stay
      Decimal columns (shared with the share ratio) without inheriting its rounding
"""

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal

EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def add_amount(total: Decimal, amount: int | Decimal) -> Decimal:
    return EXACT_CONTEXT.add(total, Decimal(amount))


def subtract_amount(total: Decimal, amount: int | Decimal) -> Decimal:
    return EXACT_CONTEXT.subtract(total, Decimal(amount))
