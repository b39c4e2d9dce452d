import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.filters import OrderFilter
from orders.serializers import (
    OrderItemsInputSerializer,
    OrderSerializer,
    TableDetailSerializer,
    TableStatusSerializer,
    UpdateOrderStatusSerializer,
)
from orders.services import OrderService, TableService

logger = logging.getLogger(__name__)


class RestaurantTablesView(APIView):
    """Tables of a restaurant with occupancy. Generates the tables on first call."""

    def get(self, request, restaurant_id):
        restaurant, tables = TableService.list_tables(restaurant_id)
        return Response(
            {
                "restaurant_id": restaurant.id,
                "restaurant_name": restaurant.name,
                "tables": TableStatusSerializer(tables, many=True).data,
            }
        )


class TableDetailView(APIView):
    def get(self, request, restaurant_id, table_id):
        table = TableService.get_table(restaurant_id, table_id)
        return Response(TableDetailSerializer(table).data)


class TableOrdersView(generics.ListAPIView):
    """
    Order history of one table, newest first.

    Query params:
    - status: PENDING, PREPARING, READY, SERVED, COMPLETED or CANCELLED
    """

    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_queryset(self):
        return OrderService.list_table_orders(
            self.kwargs["restaurant_id"], self.kwargs["table_id"]
        )


class CreateOrderView(APIView):
    def post(self, request, restaurant_id, table_id):
        serializer = OrderItemsInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.create_order(
            restaurant_id, table_id, serializer.validated_data["items"]
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """
    GET reads the order, PATCH appends items, DELETE cancels it.

    Cancelling only flips the status; the order stays readable.
    """

    def get(self, request, restaurant_id, table_id, order_id):
        order = OrderService.get_order_by_id(restaurant_id, table_id, order_id)
        return Response(OrderSerializer(order).data)

    def patch(self, request, restaurant_id, table_id, order_id):
        serializer = OrderItemsInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.add_items_to_order(
            restaurant_id, table_id, order_id, serializer.validated_data["items"]
        )
        return Response(OrderSerializer(order).data)

    def delete(self, request, restaurant_id, table_id, order_id):
        order = OrderService.cancel_order(restaurant_id, table_id, order_id)
        return Response(OrderSerializer(order).data)


class OrderStatusView(APIView):
    def patch(self, request, restaurant_id, table_id, order_id):
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_order_status(
            restaurant_id, table_id, order_id, serializer.validated_data["status"]
        )
        return Response(OrderSerializer(order).data)
