"""Exact Amounts — running totals never round, whatever the ambient decimal context."""

from decimal import Decimal, localcontext

from pool_indexer.core.exact_amounts import add_amount, subtract_amount

UINT256_MAX = 2**256 - 1


def test_add_keeps_every_digit_past_default_precision():
    assert add_amount(Decimal(10**30), 1) == Decimal(10**30 + 1)


def test_subtract_keeps_every_digit_past_default_precision():
    assert subtract_amount(Decimal(10**29 + 7), 3) == Decimal(10**29 + 4)


def test_uint256_bound_is_exact():
    total = add_amount(Decimal(UINT256_MAX - 5), 5)
    assert total == Decimal(UINT256_MAX)
    assert int(total) == UINT256_MAX


def test_accepts_decimal_operands():
    assert add_amount(Decimal(10**40), Decimal(10**40)) == Decimal(2 * 10**40)


def test_ignores_a_narrow_thread_context():
    with localcontext() as ctx:
        ctx.prec = 5
        assert add_amount(Decimal(123_456_789), 1) == Decimal(123_456_790)


def test_result_may_go_negative():
    assert subtract_amount(Decimal(1), 10**31) == Decimal(1 - 10**31)
