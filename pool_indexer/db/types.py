"""Exact Numeric Columns — uint256 integers and 34-digit decimals stored as text.

Invariants:
    - Round-trip is lossless: what the handler wrote is what the next handler reads
    - BigInteger values may be negative (reserves can dip below zero on malformed input,
      and the ledger records what happened)
    - Python side always sees int / Decimal, never str or float

Design Decisions:
    - Text storage over NUMERIC: SQLite coerces NUMERIC to float and 8-byte ints,
      which silently truncates uint256 amounts; text is exact on every backend
"""

from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

NUMERIC_TEXT_LENGTH = 100


class BigInteger256(TypeDecorator):
    """Arbitrary-size integer persisted as its decimal string."""
    impl = String(NUMERIC_TEXT_LENGTH)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)


class ExactDecimal(TypeDecorator):
    """Decimal persisted as its canonical string (no float round-trip)."""
    impl = String(NUMERIC_TEXT_LENGTH)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
