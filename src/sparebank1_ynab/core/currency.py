#!/usr/bin/env python3
"""
Currency Conversion and Formatting

SpareBank1 reports amounts as floating point NOK; YNAB stores integer
milliunits (1000 milliunits = 1 NOK).

Conversion rules:
- Milliunits are produced by truncating ``amount * 1000`` toward zero,
  never by rounding. ``-0.0`` becomes ``0``. The multiplication is done in
  ``Decimal`` on the amount's shortest text, so ``2.01`` is 2010 milliunits
  and not 2009.
- The textual amount inside an import id is Python's shortest round-trip
  float repr (``-127.5``, ``-50.0``, ``0.01``). Import ids already stored in
  YNAB depend on this exact text, so it must never change.
"""

from decimal import Decimal


def amount_to_milliunits(amount: float) -> int:
    """
    Convert a NOK amount to YNAB milliunits, truncating toward zero.

    Example:
        amount_to_milliunits(-127.5) -> -127500
        amount_to_milliunits(2.01) -> 2010
        amount_to_milliunits(0.0019) -> 1
    """
    # int() truncates toward zero and never yields negative zero
    return int(Decimal(format_amount(amount)) * 1000)


def format_amount(amount: float) -> str:
    """
    Render an amount for use inside an import id.

    Example:
        format_amount(-127.50) -> "-127.5"
        format_amount(-50) -> "-50.0"
    """
    return repr(float(amount))


def format_milliunits(milliunits: int, currency: str = "NOK") -> str:
    """
    Format milliunits for display using integer arithmetic.

    Example:
        format_milliunits(-127500) -> "-127.50 NOK"
    """
    sign = "-" if milliunits < 0 else ""
    whole, remainder = divmod(abs(milliunits), 1000)
    return f"{sign}{whole}.{remainder // 10:02d} {currency}"
