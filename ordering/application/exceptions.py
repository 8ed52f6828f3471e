"""Application-level errors raised at the collaborator boundary."""


class OrderingError(Exception):
    """Base class for ordering application errors."""


class OrderNotFoundError(OrderingError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class OrderItemNotFoundError(OrderingError):
    def __init__(self, order_id: str, item_id: str) -> None:
        super().__init__(f"Item {item_id} not found in order {order_id}")
        self.order_id = order_id
        self.item_id = item_id


class InvalidTransitionError(OrderingError):
    def __init__(self, transition: str, state: str) -> None:
        super().__init__(f"Transition '{transition}' cannot be applied from state '{state}'")
        self.transition = transition
        self.state = state
