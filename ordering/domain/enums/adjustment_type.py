"""Adjustment type tags."""
from enum import Enum


class AdjustmentType(str, Enum):
    """Common adjustment type tags used as filters."""

    TAX = "tax"
    PROMOTION = "promotion"
    SHIPPING = "shipping"
    ORDER_PROMOTION = "order_promotion"
    ORDER_ITEM_PROMOTION = "order_item_promotion"
