"""Trade volume aggregation.

All arithmetic uses Decimal. Upstream trade lists are summed best-effort:
a malformed record or field contributes zero instead of failing the sum.
"""

from collections.abc import Iterable, Iterator
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


def parse_decimal(value: Any) -> Decimal:
    """Convert an upstream numeric field to Decimal, falling back to zero.

    Accepts strings and numbers. None, empty strings, booleans, garbage
    and non-finite values (NaN, Infinity) all become zero.
    """
    if value is None or isinstance(value, bool):
        return _ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return _ZERO
    if not result.is_finite():
        return _ZERO
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _is_record_sequence(records: Any) -> bool:
    # dicts and strings are iterable but are never a trade list
    return isinstance(records, (list, tuple, Iterator))


def sum_field(records: Any, field: str = "quoteQty") -> Decimal:
    """Sum one numeric field across trade records.

    Args:
        records: Upstream payload, expected to be a list (or iterator) of dicts.
        field: Record key to sum.

    Returns:
        Unrounded total. Zero when the payload is not a list.
    """
    if not _is_record_sequence(records):
        return _ZERO
    total = _ZERO
    for record in records:
        if isinstance(record, dict):
            total += parse_decimal(record.get(field))
    return total


def sum_quote_quantity(records: Iterable[dict] | Any) -> Decimal:
    """Total quote-currency volume of a trade list, rounded to cents."""
    return round_money(sum_field(records, "quoteQty"))
