import logging

from core_backend.exceptions import NotFoundError
from orders.models import Order
from restaurants.models import Restaurant, Table

logger = logging.getLogger(__name__)


class OwnershipService:
    """
    Validates the restaurant -> table -> order chain for every order operation.

    Everything that fails a scoping check is reported as "not found" so callers
    cannot tell ids under other restaurants apart from missing ones.
    """

    @staticmethod
    def get_restaurant(restaurant_id) -> Restaurant:
        restaurant = Restaurant.objects.filter(id=restaurant_id).first()
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        return restaurant

    @staticmethod
    def resolve_table(restaurant_id, table_id) -> Table:
        """
        Raises:
            NotFoundError: restaurant absent, table absent, or table belongs
                to another restaurant (checked in that order)
        """
        OwnershipService.get_restaurant(restaurant_id)

        table = Table.objects.select_related("restaurant").filter(id=table_id).first()

        if table is None:
            raise NotFoundError("Table not found")
        if table.restaurant_id != restaurant_id:
            logger.warning(
                f"Table {table_id} requested under restaurant {restaurant_id} "
                f"but belongs to restaurant {table.restaurant_id}"
            )
            raise NotFoundError("Table not found in this restaurant")
        return table

    @staticmethod
    def resolve_order(restaurant_id, table_id, order_id, for_update=False) -> Order:
        """
        Load an order and confirm it sits at the given table of the given restaurant.

        With for_update=True the order row stays locked until the surrounding
        transaction ends.
        """
        queryset = Order.objects.select_related("table", "table__restaurant")
        if for_update:
            queryset = queryset.select_for_update(of=("self",))
        order = queryset.filter(id=order_id).first()

        if order is None:
            raise NotFoundError("Order not found")
        if order.table.restaurant_id != restaurant_id:
            logger.warning(
                f"Order {order_id} requested under restaurant {restaurant_id} "
                f"but belongs to restaurant {order.table.restaurant_id}"
            )
            raise NotFoundError("Order not found in this restaurant")
        if order.table_id != table_id:
            logger.warning(
                f"Order {order_id} requested at table {table_id} but sits at table {order.table_id}"
            )
            raise NotFoundError("Order not found at this table")
        return order
