from rest_framework import serializers

from orders.calculators import MAX_QUANTITY
from orders.models import Order, OrderItem
from restaurants.serializers import MenuCategorySerializer


class OrderLineInputSerializer(serializers.Serializer):
    menu_item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)

    def to_internal_value(self, data):
        # IntegerField happily coerces True to 1
        if isinstance(data, dict):
            for field in ("menu_item_id", "quantity"):
                if isinstance(data.get(field), bool):
                    raise serializers.ValidationError({field: ["A valid integer is required."]})
        return super().to_internal_value(data)


class OrderItemsInputSerializer(serializers.Serializer):
    """Body of create-order and add-items requests."""

    items = OrderLineInputSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.OrderStatus.choices)


class OrderMenuItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    currency = serializers.CharField()
    category = MenuCategorySerializer()


class OrderItemSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.IntegerField(read_only=True, allow_null=True)
    menu_item = OrderMenuItemSerializer(read_only=True, allow_null=True)
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ["id", "menu_item_id", "menu_item", "name", "quantity", "price", "line_total"]

    def get_line_total(self, obj):
        return f"{obj.total_price:.2f}"


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    table_id = serializers.IntegerField(read_only=True)
    table_number = serializers.IntegerField(source="table.table_number", read_only=True)
    restaurant_id = serializers.IntegerField(source="table.restaurant_id", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "restaurant_id",
            "table_id",
            "table_number",
            "status",
            "total",
            "currency",
            "items",
            "created_at",
            "updated_at",
        ]


class ActiveOrderSerializer(serializers.ModelSerializer):
    """Compact order for table listings."""

    items = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ["id", "status", "total", "currency", "items", "created_at"]

    def get_items(self, obj):
        return [
            {"name": item.name, "quantity": item.quantity, "price": f"{item.price:.2f}"}
            for item in obj.items.all()
        ]


class TableStatusSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    table_number = serializers.IntegerField()
    restaurant_id = serializers.IntegerField()
    active_orders_count = serializers.IntegerField()
    is_occupied = serializers.SerializerMethodField()
    active_orders = ActiveOrderSerializer(many=True)

    def get_is_occupied(self, obj):
        return obj.active_orders_count > 0


class TableDetailSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    table_number = serializers.IntegerField()
    restaurant_id = serializers.IntegerField()
    restaurant_name = serializers.CharField(source="restaurant.name")
    orders = OrderSerializer(source="all_orders", many=True)
