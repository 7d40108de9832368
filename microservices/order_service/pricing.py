"""
Order Pricing

Subtotal, threshold discount and total for validated line items.
"""

from decimal import Decimal
from typing import Sequence

from .models import OrderLineItem, PricingResult

DISCOUNT_THRESHOLD = Decimal("1000")
DISCOUNT_RATE = Decimal("0.10")


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


class PricingCalculator:
    """Pure pricing rules, no I/O"""

    def __init__(
        self,
        discount_threshold: Decimal = DISCOUNT_THRESHOLD,
        discount_rate: Decimal = DISCOUNT_RATE
    ):
        self.discount_threshold = discount_threshold
        self.discount_rate = discount_rate

    def price(self, items: Sequence[OrderLineItem]) -> PricingResult:
        """
        Price line items in input order.

        A subtotal equal to the threshold gets no discount.
        """
        subtotal = Decimal("0")
        for item in items:
            subtotal += _to_decimal(item.price) * _to_decimal(item.quantity)

        discount = Decimal("0")
        if subtotal > self.discount_threshold:
            discount = subtotal * self.discount_rate

        return PricingResult(subtotal=subtotal, discount=discount, total=subtotal - discount)


def calculate_price(items: Sequence[OrderLineItem]) -> PricingResult:
    """Price items with the default threshold and rate"""
    return PricingCalculator().price(items)
