"""Static mappers for domain entities ↔ database models."""

from typing import Dict, Iterable, List

from ordering.domain.entities import Adjustment, Order, OrderItem

from .models.order_model import AdjustmentModel, OrderItemModel, OrderModel


class AdjustmentMapper:
    """Static mapper for Adjustment ↔ AdjustmentModel transformation."""

    @staticmethod
    def to_domain(model: AdjustmentModel) -> Adjustment:
        """Convert ORM model to a detached domain entity.

        Args:
            model: AdjustmentModel instance

        Returns:
            Adjustment domain entity
        """
        return Adjustment(
            id=model.id,
            type=model.type,
            amount=model.amount,
            label=model.label,
            neutral=bool(model.neutral),
            locked=bool(model.locked),
            origin_code=model.origin_code,
            details=dict(model.details or {}),
        )

    @staticmethod
    def apply(entity: Adjustment, model: AdjustmentModel, position: int) -> AdjustmentModel:
        """Copy entity state onto a (new or existing) ORM model."""
        model.position = position
        model.type = entity.type
        model.label = entity.label
        model.amount = entity.amount
        model.neutral = entity.neutral
        model.locked = entity.locked
        model.origin_code = entity.origin_code
        model.details = dict(entity.details)
        return model

    @staticmethod
    def sync(
        entities: Iterable[Adjustment],
        existing: Dict[str, AdjustmentModel],
    ) -> List[AdjustmentModel]:
        """Build a collection reusing existing rows by id.

        Args:
            entities: Adjustments in collection order
            existing: Every adjustment row of the order graph, by id

        Returns:
            ORM models in collection order
        """
        models = []
        for position, entity in enumerate(entities):
            model = existing.get(entity.id) or AdjustmentModel(id=entity.id)
            models.append(AdjustmentMapper.apply(entity, model, position))
        return models


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        """Convert ORM model to domain entity (with its adjustments).

        Args:
            model: OrderItemModel instance

        Returns:
            OrderItem domain entity
        """
        return OrderItem.reconstitute(
            id=model.id,
            quantity=model.quantity,
            unit_price=model.unit_price,
            adjustments=[AdjustmentMapper.to_domain(a) for a in model.adjustments],
            product_code=model.product_code,
            name=model.name,
        )

    @staticmethod
    def apply(
        entity: OrderItem,
        model: OrderItemModel,
        position: int,
        existing_adjustments: Dict[str, AdjustmentModel],
    ) -> OrderItemModel:
        """Copy entity state onto a (new or existing) ORM model."""
        model.position = position
        model.product_code = entity.product_code
        model.name = entity.name
        model.quantity = entity.quantity
        model.unit_price = entity.unit_price
        model.adjustments_total = entity.adjustments_total
        model.total = entity.total
        model.adjustments = AdjustmentMapper.sync(
            entity.get_adjustments(), existing_adjustments
        )
        return model


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Cached totals are recalculated from the loaded collections; the
        stored total columns are not trusted.

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        return Order.reconstitute(
            id=model.id,
            items=[OrderItemMapper.to_domain(item_model) for item_model in model.items],
            adjustments=[AdjustmentMapper.to_domain(a) for a in model.adjustments],
            number=model.number,
            notes=model.notes,
            state=model.state,
            checkout_completed_at=model.checkout_completed_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to a new ORM model.

        Args:
            entity: Order domain aggregate (identifiers assigned)

        Returns:
            OrderModel instance
        """
        return OrderMapper.update_persistence(entity, OrderModel(id=entity.id))

    @staticmethod
    def update_persistence(entity: Order, model: OrderModel) -> OrderModel:
        """Update ORM model from domain aggregate.

        Child rows are matched by id: existing rows are updated in place,
        new ones created, and rows no longer in the graph are orphaned
        (and deleted by the cascade).

        Args:
            entity: Order domain aggregate
            model: OrderModel instance (new or loaded)

        Returns:
            Updated OrderModel instance
        """
        model.number = entity.number
        model.notes = entity.notes
        model.state = entity.state
        model.checkout_completed_at = entity.checkout_completed_at
        model.items_total = entity.items_total
        model.adjustments_total = entity.adjustments_total
        model.total = entity.total

        existing_items = {item_model.id: item_model for item_model in model.items}
        existing_adjustments = {a.id: a for a in model.adjustments}
        for item_model in model.items:
            existing_adjustments.update({a.id: a for a in item_model.adjustments})

        model.adjustments = AdjustmentMapper.sync(
            entity.get_adjustments(), existing_adjustments
        )
        model.items = [
            OrderItemMapper.apply(
                item,
                existing_items.get(item.id) or OrderItemModel(id=item.id),
                position,
                existing_adjustments,
            )
            for position, item in enumerate(entity.items)
        ]

        return model
