"""Order workflow (state machine collaborator)."""

from .order_state_machine import OrderStateMachine, OrderTransitions

__all__ = ["OrderStateMachine", "OrderTransitions"]
