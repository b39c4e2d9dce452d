from rest_framework import serializers

from restaurants.models import MenuCategory, MenuItem


class MenuCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuCategory
        fields = ["id", "name", "description"]


class MenuItemSerializer(serializers.ModelSerializer):
    """Flat menu entry. Category details travel with every item."""

    category = MenuCategorySerializer(read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "name",
            "description",
            "price",
            "currency",
            "is_available",
            "tags",
            "allergens",
            "category",
        ]


class MenuUploadSerializer(serializers.Serializer):
    """Multipart upload carrying the replacement menu."""

    menu_csv = serializers.FileField()
