"""
Order state machine.

Decides which `state` transitions are legal and applies them through
`Order.set_state`. The aggregate itself accepts any state string.

Graph:
    cart --create--> new --cancel--> cancelled
                     new --fulfill--> fulfilled
"""
from typing import Dict, FrozenSet, List, Tuple

from ordering.application.exceptions import InvalidTransitionError
from ordering.domain.entities import Order
from ordering.domain.enums import OrderState


class OrderTransitions:
    CREATE = "create"
    CANCEL = "cancel"
    FULFILL = "fulfill"


# transition -> (allowed source states, target state)
_TRANSITIONS: Dict[str, Tuple[FrozenSet[str], str]] = {
    OrderTransitions.CREATE: (frozenset({OrderState.CART.value}), OrderState.NEW.value),
    OrderTransitions.CANCEL: (frozenset({OrderState.NEW.value}), OrderState.CANCELLED.value),
    OrderTransitions.FULFILL: (frozenset({OrderState.NEW.value}), OrderState.FULFILLED.value),
}


class OrderStateMachine:
    """Checkout workflow collaborator for the order `state` field."""

    def can(self, order: Order, transition: str) -> bool:
        if transition not in _TRANSITIONS:
            return False
        sources, _ = _TRANSITIONS[transition]
        return order.get_state() in sources

    def available_transitions(self, order: Order) -> List[str]:
        return [name for name in _TRANSITIONS if self.can(order, name)]

    def apply(self, order: Order, transition: str) -> None:
        """
        Move the order along a transition.

        Raises:
            InvalidTransitionError: If the transition is unknown or not
                allowed from the current state
        """
        if not self.can(order, transition):
            raise InvalidTransitionError(transition, order.get_state())

        _, target = _TRANSITIONS[transition]
        order.set_state(target)
