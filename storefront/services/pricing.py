from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from storefront.constants import PROCESSING_FEE_CAP, PROCESSING_FEE_RATE


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    processing_fee: int
    total: float


def calc_subtotal(items: Iterable) -> float:
    """Sum of price * quantity; accepts CartItem, OrderItem or anything shaped like them."""
    return sum(float(it.price or 0) * int(it.quantity or 0) for it in items)


def calc_processing_fee(subtotal: float) -> int:
    # half-up rounding, not Python's banker's rounding
    return min(int(math.floor(subtotal * PROCESSING_FEE_RATE + 0.5)), PROCESSING_FEE_CAP)


def order_totals(items: Iterable) -> OrderTotals:
    subtotal = calc_subtotal(items)
    fee = calc_processing_fee(subtotal)
    return OrderTotals(subtotal=subtotal, processing_fee=fee, total=subtotal + fee)
