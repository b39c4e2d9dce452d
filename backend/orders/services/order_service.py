import logging

from django.db import transaction
from django.db.models import F, Prefetch
from django.utils import timezone

from core_backend.exceptions import BadRequestError
from orders.calculators import OrderTotalCalculator
from orders.models import Order, OrderItem
from restaurants.services import MenuCatalogService

from .ownership_service import OwnershipService

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order lifecycle for a (restaurant, table) context.

    Every operation resolves the ownership chain first, then applies its
    business rule, then writes. Orders are never deleted here; cancelling is
    a status change.
    """

    # Forward along the kitchen line (steps may be skipped), or cancel while open
    VALID_STATUS_TRANSITIONS = {
        Order.OrderStatus.PENDING: [
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.READY,
            Order.OrderStatus.SERVED,
            Order.OrderStatus.COMPLETED,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.PREPARING: [
            Order.OrderStatus.READY,
            Order.OrderStatus.SERVED,
            Order.OrderStatus.COMPLETED,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.READY: [
            Order.OrderStatus.SERVED,
            Order.OrderStatus.COMPLETED,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.SERVED: [
            Order.OrderStatus.COMPLETED,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.COMPLETED: [],
        Order.OrderStatus.CANCELLED: [],
    }

    @staticmethod
    def order_queryset():
        """Orders with the full graph a response needs, in a fixed number of queries."""
        return Order.objects.select_related("table", "table__restaurant").prefetch_related(
            Prefetch(
                "items",
                queryset=OrderItem.objects.select_related("menu_item", "menu_item__category"),
            )
        )

    @staticmethod
    def normalize_items(items) -> list:
        """
        Check the shape of requested lines before touching the database.

        Raises:
            BadRequestError: empty list, non-positive or non-integer ids, or
                quantities outside 1..MAX_QUANTITY
        """
        if not items:
            raise BadRequestError("Order must contain at least one item")

        normalized = []
        for position, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                raise BadRequestError(f"Item {position} must be an object")
            menu_item_id = item.get("menu_item_id")
            if isinstance(menu_item_id, bool) or not isinstance(menu_item_id, int) or menu_item_id < 1:
                raise BadRequestError(f"Item {position}: menu_item_id must be a positive integer")
            quantity = OrderTotalCalculator.validate_quantity(item.get("quantity"))
            normalized.append({"menu_item_id": menu_item_id, "quantity": quantity})
        return normalized

    @staticmethod
    def _build_order_items(order, lines):
        return [
            OrderItem(
                order=order,
                menu_item=line.menu_item,
                name=line.menu_item.name,
                quantity=line.quantity,
                price=line.unit_price,
            )
            for line in lines
        ]

    @staticmethod
    @transaction.atomic
    def create_order(restaurant_id, table_id, items) -> Order:
        """
        Place a new PENDING order at a table.

        All requested items must resolve; otherwise nothing is written.
        The order currency is taken from the first line.
        """
        items = OrderService.normalize_items(items)
        table = OwnershipService.resolve_table(restaurant_id, table_id)
        lines = MenuCatalogService.resolve_items(restaurant_id, items)

        total = OrderTotalCalculator.ensure_within_limit(OrderTotalCalculator.order_total(lines))
        order = Order.objects.create(
            table=table,
            total=total,
            currency=lines[0].currency,
            status=Order.OrderStatus.PENDING,
        )
        OrderItem.objects.bulk_create(OrderService._build_order_items(order, lines))

        logger.info(
            f"Created order {order.id} at table {table.table_number} of restaurant "
            f"{restaurant_id}: {len(lines)} item(s), total {total} {order.currency}"
        )
        return OrderService.order_queryset().get(id=order.id)

    @staticmethod
    def get_order_by_id(restaurant_id, table_id, order_id) -> Order:
        order = OwnershipService.resolve_order(restaurant_id, table_id, order_id)
        return OrderService.order_queryset().get(id=order.id)

    @staticmethod
    def list_table_orders(restaurant_id, table_id):
        """Orders placed at a table, newest first."""
        table = OwnershipService.resolve_table(restaurant_id, table_id)
        return OrderService.order_queryset().filter(table=table).order_by("-created_at", "-id")

    @staticmethod
    @transaction.atomic
    def add_items_to_order(restaurant_id, table_id, order_id, items) -> Order:
        """
        Append lines to an open order.

        The order row is locked for the rest of the transaction and the total
        is bumped with an F() expression, so concurrent additions all land.
        """
        items = OrderService.normalize_items(items)
        order = OwnershipService.resolve_order(restaurant_id, table_id, order_id, for_update=True)

        if order.is_terminal:
            raise BadRequestError("Cannot add items to completed or cancelled order")

        lines = MenuCatalogService.resolve_items(restaurant_id, items)
        additional = OrderTotalCalculator.order_total(lines)
        expected_total = OrderTotalCalculator.ensure_within_limit(
            OrderTotalCalculator.accumulate(order.total, lines)
        )

        OrderItem.objects.bulk_create(OrderService._build_order_items(order, lines))
        Order.objects.filter(id=order.id).update(
            total=F("total") + additional,
            updated_at=timezone.now(),
        )

        logger.info(
            f"Added {len(lines)} item(s) to order {order.id}: +{additional}, "
            f"total now {expected_total} {order.currency}"
        )
        return OrderService.order_queryset().get(id=order.id)

    @staticmethod
    @transaction.atomic
    def update_order_status(restaurant_id, table_id, order_id, new_status) -> Order:
        """
        Move an order along its lifecycle.

        Setting the current status again on an open order changes nothing.
        """
        order = OwnershipService.resolve_order(restaurant_id, table_id, order_id, for_update=True)

        try:
            new_status = Order.OrderStatus(new_status)
        except ValueError:
            valid = ", ".join(Order.OrderStatus.values)
            raise BadRequestError(f"Invalid status '{new_status}'. Must be one of: {valid}")

        if order.status == new_status and not order.is_terminal:
            return OrderService.order_queryset().get(id=order.id)

        if new_status not in OrderService.VALID_STATUS_TRANSITIONS.get(order.status, []):
            raise BadRequestError(
                f"Cannot transition order from {order.status} to {new_status}"
            )

        previous_status = order.status
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])

        logger.info(f"Order {order.id} status changed from {previous_status} to {new_status}")
        return OrderService.order_queryset().get(id=order.id)

    @staticmethod
    def cancel_order(restaurant_id, table_id, order_id) -> Order:
        return OrderService.update_order_status(
            restaurant_id, table_id, order_id, Order.OrderStatus.CANCELLED
        )
