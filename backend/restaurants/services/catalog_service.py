from dataclasses import dataclass
from decimal import Decimal
import logging

from restaurants.exceptions import MenuItemsUnavailableError
from restaurants.models import MenuItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedLine:
    """A requested menu item bound to its authoritative price at resolution time."""

    menu_item: MenuItem
    quantity: int

    @property
    def unit_price(self) -> Decimal:
        return self.menu_item.price

    @property
    def currency(self) -> str:
        return self.menu_item.currency


class MenuCatalogService:
    """Resolves menu item ids against one restaurant's orderable catalog."""

    @staticmethod
    def get_orderable_items(restaurant_id, menu_item_ids):
        """
        Items that exist, belong to the restaurant through their category, and
        are available. Anything else is invisible to ordering.
        """
        return MenuItem.objects.select_related("category").filter(
            id__in=set(menu_item_ids),
            category__restaurant_id=restaurant_id,
            is_available=True,
        )

    @staticmethod
    def resolve_items(restaurant_id, requested_items) -> list:
        """
        Resolve [{"menu_item_id", "quantity"}, ...] into ResolvedLines.

        Duplicate ids are allowed and produce one line each, in request order.

        Raises:
            MenuItemsUnavailableError: listing every id that does not exist, belongs
                to another restaurant, or is unavailable
        """
        requested_ids = [item["menu_item_id"] for item in requested_items]
        menu_items = {
            menu_item.id: menu_item
            for menu_item in MenuCatalogService.get_orderable_items(restaurant_id, requested_ids)
        }

        # dict.fromkeys keeps request order while dropping repeats
        missing_ids = list(dict.fromkeys(
            item_id for item_id in requested_ids if item_id not in menu_items
        ))
        if missing_ids:
            logger.warning(
                f"Unresolvable menu items {missing_ids} requested for restaurant {restaurant_id}"
            )
            raise MenuItemsUnavailableError(missing_ids)

        return [
            ResolvedLine(menu_item=menu_items[item["menu_item_id"]], quantity=item["quantity"])
            for item in requested_items
        ]
