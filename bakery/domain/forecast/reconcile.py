"""Stock reconciliation: turn a demand estimate into what still has to be made."""

from __future__ import annotations


def reconcile_with_stock(raw_suggestion: int, stock: int | None) -> int:
    """Subtract on-hand stock from the demand estimate.

    Examples:
        >>> reconcile_with_stock(30, 10)
        20
        >>> reconcile_with_stock(30, 45)
        0
        >>> reconcile_with_stock(30, None)
        30

    """
    if not stock or stock <= 0:
        return raw_suggestion

    if stock >= raw_suggestion:
        return 0

    return raw_suggestion - stock
