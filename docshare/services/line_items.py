"""Rebuilds full line items from the compact ``[name, qty, unitPrice]`` form."""
import math
from typing import List, Sequence

from ..models import CompactLineItem, LineItem, Number


def round_cents(amount: Number) -> float:
    """Round to cents, half away from zero (3 * 0.1 -> 0.3, not 0.30000000000000004)."""
    if not math.isfinite(amount):
        return amount
    cents = math.floor(abs(amount) * 100 + 0.5)
    return (-cents if amount < 0 else cents) / 100


def expand_line_items(compact: Sequence[CompactLineItem]) -> List[LineItem]:
    # Positional ids only give the rows an identity for rendering
    return [
        LineItem(
            id=str(i),
            name=name,
            quantity=quantity,
            unit_price=unit_price,
            total=round_cents(quantity * unit_price),
        )
        for i, (name, quantity, unit_price) in enumerate(compact)
    ]
