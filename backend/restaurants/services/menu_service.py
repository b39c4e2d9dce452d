import logging

from django.db import transaction

from core_backend.exceptions import ForbiddenError, NotFoundError
from restaurants.models import MenuCategory, MenuItem, Restaurant

logger = logging.getLogger(__name__)


class MenuService:
    """Owner-scoped menu reads and deletion."""

    @staticmethod
    def get_owned_restaurant(restaurant_id, owner) -> Restaurant:
        restaurant = Restaurant.objects.filter(id=restaurant_id).first()
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        if restaurant.owner_id != owner.id:
            logger.warning(
                f"User {owner.id} denied access to menu of restaurant {restaurant_id}"
            )
            raise ForbiddenError("You do not own this restaurant")
        return restaurant

    @staticmethod
    def get_menu(restaurant):
        """All items of the restaurant, by category name then item name."""
        return (
            MenuItem.objects.select_related("category")
            .filter(category__restaurant=restaurant)
            .order_by("category__name", "name")
        )

    @staticmethod
    @transaction.atomic
    def delete_menu(restaurant) -> dict:
        items_deleted, _ = MenuItem.objects.filter(category__restaurant=restaurant).delete()
        categories_deleted, _ = MenuCategory.objects.filter(restaurant=restaurant).delete()
        logger.info(
            f"Deleted menu for restaurant {restaurant.id}: "
            f"{categories_deleted} categories, {items_deleted} items"
        )
        return {"categories": categories_deleted, "items": items_deleted}
