"""
Order Management Tests

These tests verify order creation, item addition, status changes and
cancellation through OrderService, including the decimal totals and the
restaurant/table scoping every operation goes through.
"""
import pytest
from decimal import Decimal

from orders.models import Order, OrderItem
from orders.services import OrderService


@pytest.mark.django_db
class TestOrderCreation:
    """Test order placement at a table"""

    def test_create_order_calculates_exact_total(self, restaurant_a, table_a, menu_item_a):
        """
        CRITICAL: 2 x 12.99 must be stored as exactly 25.98

        Business Impact: Guests are billed from Order.total
        """
        order = OrderService.create_order(
            restaurant_a.id, table_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 2}]
        )

        assert order.total == Decimal("25.98"), f"Total incorrect: {order.total}"
        assert order.currency == "USD", "Currency should come from the menu item"
        assert order.status == Order.OrderStatus.PENDING
        assert order.table_id == table_a.id

        items = list(order.items.all())
        assert len(items) == 1, "Order should have 1 item"
        assert items[0].quantity == 2
        assert items[0].price == Decimal("12.99")
        assert items[0].name == "Margherita", "Item name should be snapshotted"

    def test_create_order_with_several_items(
        self, restaurant_a, table_a, menu_item_a, menu_item_a2
    ):
        """
        Verify total is the exact sum of every line

        Value: 3 x 12.99 + 2 x 8.50 = 38.97 + 17.00 = 55.97
        """
        order = OrderService.create_order(
            restaurant_a.id,
            table_a.id,
            [
                {"menu_item_id": menu_item_a.id, "quantity": 3},
                {"menu_item_id": menu_item_a2.id, "quantity": 2},
            ],
        )

        assert order.total == Decimal("55.97")
        assert order.items.count() == 2

    def test_duplicate_menu_item_ids_become_separate_lines(
        self, restaurant_a, table_a, menu_item_a
    ):
        """
        Scenario: Same menu item requested twice in one order
        Expected: Two lines, total covers both
        """
        order = OrderService.create_order(
            restaurant_a.id,
            table_a.id,
            [
                {"menu_item_id": menu_item_a.id, "quantity": 1},
                {"menu_item_id": menu_item_a.id, "quantity": 2},
            ],
        )

        assert order.items.count() == 2
        assert order.total == Decimal("38.97")

    def test_create_order_preloads_item_graph(
        self, restaurant_a, table_a, menu_item_a, django_assert_num_queries
    ):
        """Returned order must not hit the database again when rendered"""
        order = OrderService.create_order(
            restaurant_a.id, table_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 1}]
        )

        with django_assert_num_queries(0):
            item = order.items.all()[0]
            assert item.menu_item.category.name == "Pizza"
            assert order.table.restaurant.name == "Pizza Place"


@pytest.mark.django_db
class TestOrderReads:
    """Test order retrieval"""

    def test_get_order_by_id_returns_full_graph(self, restaurant_a, table_a, order_a):
        order = OrderService.get_order_by_id(restaurant_a.id, table_a.id, order_a.id)

        assert order.id == order_a.id
        assert order.items.count() == 1
        assert order.table.restaurant == restaurant_a

    def test_get_order_is_pure_read(self, restaurant_a, table_a, order_a):
        """
        Scenario: Same order read repeatedly
        Expected: No change to total, status, items or updated_at
        """
        before = Order.objects.get(id=order_a.id)

        for _ in range(3):
            OrderService.get_order_by_id(restaurant_a.id, table_a.id, order_a.id)

        after = Order.objects.get(id=order_a.id)
        assert after.total == before.total
        assert after.status == before.status
        assert after.updated_at == before.updated_at
        assert OrderItem.objects.filter(order=order_a).count() == 1

    def test_list_table_orders_newest_first(self, restaurant_a, table_a, menu_item_a):
        first = OrderService.create_order(
            restaurant_a.id, table_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 1}]
        )
        second = OrderService.create_order(
            restaurant_a.id, table_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 2}]
        )

        orders = list(OrderService.list_table_orders(restaurant_a.id, table_a.id))

        assert [o.id for o in orders] == [second.id, first.id]


@pytest.mark.django_db
class TestAddItems:
    """Test appending items to an existing order"""

    def test_add_items_updates_total_incrementally(self, restaurant_a, table_a, menu_item_a):
        """
        Scenario: Create 2 x 12.99, then add 1 x 12.99
        Expected: 38.97 total, two lines
        """
        order = OrderService.create_order(
            restaurant_a.id, table_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 2}]
        )

        order = OrderService.add_items_to_order(
            restaurant_a.id, table_a.id, order.id, [{"menu_item_id": menu_item_a.id, "quantity": 1}]
        )

        assert order.total == Decimal("38.97"), f"Total incorrect: {order.total}"
        assert order.items.count() == 2

    def test_two_additions_equal_one_combined_addition(
        self, restaurant_a, table_a, table_a2, menu_item_a, menu_item_a2
    ):
        """
        Adding A then B must store the same total as adding A and B together
        """
        a = {"menu_item_id": menu_item_a.id, "quantity": 1}
        b = {"menu_item_id": menu_item_a2.id, "quantity": 3}

        split = OrderService.create_order(restaurant_a.id, table_a.id, [a])
        OrderService.add_items_to_order(restaurant_a.id, table_a.id, split.id, [a])
        split = OrderService.add_items_to_order(restaurant_a.id, table_a.id, split.id, [b])

        combined = OrderService.create_order(restaurant_a.id, table_a2.id, [a])
        combined = OrderService.add_items_to_order(
            restaurant_a.id, table_a2.id, combined.id, [a, b]
        )

        assert split.total == combined.total == Decimal("51.48")
        assert Order.objects.get(id=split.id).total == Decimal("51.48")

    def test_added_item_keeps_price_at_time_of_ordering(
        self, restaurant_a, table_a, order_a, menu_item_a
    ):
        """Price changes after ordering must not rewrite existing lines"""
        menu_item_a.price = Decimal("15.00")
        menu_item_a.save()

        order = OrderService.add_items_to_order(
            restaurant_a.id, table_a.id, order_a.id, [{"menu_item_id": menu_item_a.id, "quantity": 1}]
        )

        prices = sorted(item.price for item in order.items.all())
        assert prices == [Decimal("12.99"), Decimal("15.00")]
        assert order.total == Decimal("40.98")


@pytest.mark.django_db
class TestOrderStatus:
    """Test status transitions and cancellation"""

    def test_forward_transitions(self, restaurant_a, table_a, order_a):
        for new_status in ["PREPARING", "READY", "SERVED", "COMPLETED"]:
            order = OrderService.update_order_status(
                restaurant_a.id, table_a.id, order_a.id, new_status
            )
            assert order.status == new_status

    def test_skipping_forward_is_allowed(self, restaurant_a, table_a, order_a):
        order = OrderService.update_order_status(
            restaurant_a.id, table_a.id, order_a.id, Order.OrderStatus.SERVED
        )
        assert order.status == Order.OrderStatus.SERVED

    def test_setting_same_status_is_noop(self, restaurant_a, table_a, order_a):
        before = Order.objects.get(id=order_a.id).updated_at

        order = OrderService.update_order_status(
            restaurant_a.id, table_a.id, order_a.id, Order.OrderStatus.PENDING
        )

        assert order.status == Order.OrderStatus.PENDING
        assert Order.objects.get(id=order_a.id).updated_at == before

    def test_cancel_flags_order_without_deleting(self, restaurant_a, table_a, order_a):
        """
        CRITICAL: Cancelling keeps the order and its items for history
        """
        order = OrderService.cancel_order(restaurant_a.id, table_a.id, order_a.id)

        assert order.status == Order.OrderStatus.CANCELLED
        assert Order.objects.filter(id=order_a.id).exists(), "Cancelled order must not be deleted"
        assert OrderItem.objects.filter(order=order_a).count() == 1
        assert order.total == Decimal("25.98")

    def test_cancel_from_preparing(self, restaurant_a, table_a, order_a):
        OrderService.update_order_status(restaurant_a.id, table_a.id, order_a.id, "PREPARING")

        order = OrderService.cancel_order(restaurant_a.id, table_a.id, order_a.id)

        assert order.status == Order.OrderStatus.CANCELLED
