import logging

from django.db.models import Count, Prefetch, Q

from orders.models import Order, OrderItem
from restaurants.models import Table

from .ownership_service import OwnershipService

logger = logging.getLogger(__name__)


class TableService:
    """Table listing with lazy generation, and single-table reads."""

    @staticmethod
    def ensure_tables(restaurant) -> int:
        """
        Create tables 1..number_of_tables the first time a restaurant is read.

        Never regenerates once any table exists. Concurrent first reads are
        safe: the unique (restaurant, table_number) constraint plus
        ignore_conflicts makes duplicate inserts no-ops.

        Returns:
            Number of tables requested for creation (0 if they already existed)
        """
        if Table.objects.filter(restaurant=restaurant).exists():
            return 0

        Table.objects.bulk_create(
            [
                Table(restaurant=restaurant, table_number=number)
                for number in range(1, restaurant.number_of_tables + 1)
            ],
            ignore_conflicts=True,
        )
        logger.info(
            f"Generated {restaurant.number_of_tables} tables for restaurant {restaurant.id}"
        )
        return restaurant.number_of_tables

    @staticmethod
    def list_tables(restaurant_id):
        """
        Tables of a restaurant with occupancy derived from open orders.

        Each table carries ``active_orders_count`` and ``active_orders``
        (orders not yet completed or cancelled, newest first).

        Returns:
            (restaurant, tables)
        """
        restaurant = OwnershipService.get_restaurant(restaurant_id)
        TableService.ensure_tables(restaurant)

        active = Q(orders__status__in=Order.ACTIVE_STATUSES)
        active_orders = (
            Order.objects.exclude(status__in=Order.TERMINAL_STATUSES)
            .prefetch_related(Prefetch("items", queryset=OrderItem.objects.order_by("id")))
            .order_by("-created_at")
        )
        tables = (
            Table.objects.filter(restaurant=restaurant)
            .annotate(active_orders_count=Count("orders", filter=active))
            .prefetch_related(Prefetch("orders", queryset=active_orders, to_attr="active_orders"))
            .order_by("table_number")
        )
        return restaurant, tables

    @staticmethod
    def get_table(restaurant_id, table_id) -> Table:
        """A table with its restaurant and every order placed there, newest first."""
        OwnershipService.resolve_table(restaurant_id, table_id)
        orders = Order.objects.select_related("table").prefetch_related(
            Prefetch(
                "items",
                queryset=OrderItem.objects.select_related("menu_item", "menu_item__category"),
            )
        ).order_by("-created_at", "-id")
        return (
            Table.objects.select_related("restaurant")
            .prefetch_related(Prefetch("orders", queryset=orders, to_attr="all_orders"))
            .get(id=table_id)
        )
