"""
Order State Enum.

Well-known lifecycle values for the Order aggregate.
"""
from enum import Enum


class OrderState(str, Enum):
    """Order lifecycle states.

    The aggregate stores the plain string value; these constants only
    name the states the checkout workflow knows about.
    """

    CART = "cart"
    NEW = "new"
    CANCELLED = "cancelled"
    FULFILLED = "fulfilled"
