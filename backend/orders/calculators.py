"""
Order total arithmetic.

All money math is Decimal. Floats are only accepted at the boundary and are
converted through their string form so 12.99 stays 12.99. Results are rounded
to two places with ROUND_HALF_EVEN; prices are stored at two places already,
so for real data this never moves a value.

Usage:
    from orders.calculators import OrderTotalCalculator

    total = OrderTotalCalculator.order_total(lines)
    new_total = OrderTotalCalculator.accumulate(order.total, more_lines)
"""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Iterable, Union

from core_backend.exceptions import BadRequestError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# Order.total and OrderItem.price are DecimalField(max_digits=10, decimal_places=2)
MAX_TOTAL = Decimal("99999999.99")
MAX_QUANTITY = 1000


def to_decimal(amount: Union[Decimal, str, int, float]) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def quantize(amount: Union[Decimal, str, int, float]) -> Decimal:
    """Round to the currency minor unit using banker's rounding."""
    return to_decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_EVEN)


class OrderTotalCalculator:
    """
    Pure totals for order lines.

    A line is anything exposing ``unit_price`` and ``quantity`` (ResolvedLine
    from the menu catalog).
    """

    @staticmethod
    def validate_quantity(quantity) -> int:
        # bool is an int subclass; True must not count as one portion
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise BadRequestError(f"Quantity must be a whole number of at least 1, got {quantity!r}")
        if quantity > MAX_QUANTITY:
            raise BadRequestError(f"Quantity must be at most {MAX_QUANTITY}, got {quantity}")
        return quantity

    @staticmethod
    def ensure_within_limit(total) -> Decimal:
        if total > MAX_TOTAL:
            raise BadRequestError(f"Order total {total} exceeds the maximum of {MAX_TOTAL}")
        return total

    @staticmethod
    def line_total(unit_price, quantity) -> Decimal:
        quantity = OrderTotalCalculator.validate_quantity(quantity)
        return quantize(to_decimal(unit_price) * quantity)

    @staticmethod
    def order_total(lines: Iterable) -> Decimal:
        # Start with Decimal('0.00') so an empty iterable still returns a Decimal
        total = sum(
            (OrderTotalCalculator.line_total(line.unit_price, line.quantity) for line in lines),
            ZERO,
        )
        return quantize(total)

    @staticmethod
    def accumulate(previous_total, lines: Iterable) -> Decimal:
        """Running total after appending lines to an order already worth previous_total."""
        return quantize(to_decimal(previous_total) + OrderTotalCalculator.order_total(lines))
