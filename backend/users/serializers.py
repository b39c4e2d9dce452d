from rest_framework import serializers

from restaurants.models import Restaurant
from users.models import User


class OwnedRestaurantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Restaurant
        fields = ["id", "name", "number_of_tables", "config_key"]


class UserProfileSerializer(serializers.ModelSerializer):
    restaurants = OwnedRestaurantSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "email_verified",
            "config_key",
            "restaurants",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
