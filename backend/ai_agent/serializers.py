"""
Argument validation for agent tool calls.

Tool arguments arrive in the agent's camelCase; validated data comes out in
the snake_case the order services take.
"""
from rest_framework import serializers

from orders.calculators import MAX_QUANTITY


class ToolOrderLineSerializer(serializers.Serializer):
    menuItemId = serializers.IntegerField(min_value=1, source="menu_item_id")
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)

    def to_internal_value(self, data):
        if isinstance(data, dict):
            for field in ("menuItemId", "quantity"):
                if isinstance(data.get(field), bool):
                    raise serializers.ValidationError({field: ["A valid integer is required."]})
        return super().to_internal_value(data)


class TableContextSerializer(serializers.Serializer):
    restaurantId = serializers.IntegerField(min_value=1, source="restaurant_id")
    tableId = serializers.IntegerField(min_value=1, source="table_id")


class OrderContextSerializer(TableContextSerializer):
    orderId = serializers.IntegerField(min_value=1, source="order_id")


class CreateOrderToolSerializer(TableContextSerializer):
    items = ToolOrderLineSerializer(many=True, allow_empty=False)


class AddItemsToolSerializer(OrderContextSerializer):
    items = ToolOrderLineSerializer(many=True, allow_empty=False)
