import csv
import io
import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction

from core_backend.exceptions import BadRequestError, NotFoundError
from restaurants.exceptions import MenuValidationError
from restaurants.models import MenuCategory, MenuItem, Restaurant

logger = logging.getLogger(__name__)

AVAILABLE_VALUES = {"true", "1", "yes", "available"}

# DecimalField(max_digits=10, decimal_places=2)
MAX_PRICE = Decimal("99999999.99")


class MenuImportService:
    """
    Replaces a restaurant's whole menu from an uploaded CSV file.

    Expected columns: name, category, price, and optionally description,
    currency, isAvailable (or is_available), tags, allergens. Tags and
    allergens are comma-separated inside their cell.
    """

    @staticmethod
    def parse_csv(uploaded_file) -> list:
        """
        Read an uploaded CSV into a list of row dicts with stripped keys and values.

        Cells missing from a short row come back as empty strings, the same
        as blank cells.
        """
        raw = uploaded_file.read()
        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8-sig")
            except UnicodeDecodeError:
                raise BadRequestError("Menu file must be a UTF-8 encoded CSV")
        else:
            text = raw

        reader = csv.DictReader(io.StringIO(text), restval="")
        if not reader.fieldnames:
            raise BadRequestError("Menu file is empty or has no header row")

        rows = []
        for row in reader:
            cleaned = {}
            for key, value in row.items():
                if key is None:
                    # Cells beyond the header
                    continue
                cleaned[key.strip()] = value.strip() if isinstance(value, str) else value
            rows.append(cleaned)
        return rows

    @staticmethod
    def _parse_price(value):
        try:
            price = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            return None
        if not price.is_finite():
            return None
        return price

    @staticmethod
    def validate_rows(rows) -> list:
        """
        Collect every validation error across all rows. Row numbers are 1-based
        and count data rows only.
        """
        errors = []
        max_description = settings.MENU_DESCRIPTION_MAX_LENGTH

        for index, row in enumerate(rows, start=1):
            prefix = f"Row {index}"

            if not (row.get("name") or "").strip():
                errors.append(f"{prefix}: name is required")
            if not (row.get("category") or "").strip():
                errors.append(f"{prefix}: category is required")

            raw_price = (row.get("price") or "").strip()
            if not raw_price:
                errors.append(f"{prefix}: price is required")
            else:
                price = MenuImportService._parse_price(raw_price)
                if price is None:
                    errors.append(f"{prefix}: price '{raw_price}' is not a valid number")
                elif price < 0:
                    errors.append(f"{prefix}: price must not be negative")
                elif price > MAX_PRICE:
                    errors.append(f"{prefix}: price is too large")

            currency = row.get("currency")
            if currency is not None and not currency.strip():
                errors.append(f"{prefix}: currency cannot be empty")
            elif currency is not None and len(currency.strip()) > 10:
                errors.append(f"{prefix}: currency must be at most 10 characters")

            description = row.get("description") or ""
            if len(description) > max_description:
                errors.append(
                    f"{prefix}: description must be at most {max_description} characters"
                )

        return errors

    @staticmethod
    def _split_list(value):
        if not value:
            return []
        return [part.strip() for part in value.split(",") if part.strip()]

    @staticmethod
    def _parse_available(row):
        value = row.get("isAvailable")
        if value is None:
            value = row.get("is_available")
        if value is None or not value.strip():
            return True
        return value.strip().lower() in AVAILABLE_VALUES

    @staticmethod
    def build_item_fields(row) -> dict:
        """Map a validated CSV row onto MenuItem field values."""
        currency = row.get("currency")
        return {
            "name": row["name"].strip(),
            "description": (row.get("description") or "").strip(),
            "price": MenuImportService._parse_price(row["price"].strip()),
            "currency": currency.strip() if currency is not None else settings.MENU_DEFAULT_CURRENCY,
            "is_available": MenuImportService._parse_available(row),
            "tags": MenuImportService._split_list(row.get("tags")),
            "allergens": MenuImportService._split_list(row.get("allergens")),
        }

    @staticmethod
    @transaction.atomic
    def replace_menu(restaurant_id, rows) -> dict:
        """
        Delete the restaurant's categories and items and recreate them from rows.

        Validation runs before any write; a rejected file leaves the previous
        menu untouched. Everything else happens in one transaction.

        Returns:
            {"categories": <created>, "items": <created>}
        """
        restaurant = Restaurant.objects.filter(id=restaurant_id).first()
        if restaurant is None:
            raise NotFoundError("Restaurant not found")

        errors = MenuImportService.validate_rows(rows)
        if errors:
            logger.warning(
                f"Rejected menu upload for restaurant {restaurant_id}: {len(errors)} error(s)"
            )
            raise MenuValidationError(errors)

        MenuItem.objects.filter(category__restaurant=restaurant).delete()
        MenuCategory.objects.filter(restaurant=restaurant).delete()

        category_cache = {}
        items = []
        for row in rows:
            category_name = row["category"].strip()
            category = category_cache.get(category_name)
            if category is None:
                category, _ = MenuCategory.objects.get_or_create(
                    restaurant=restaurant, name=category_name
                )
                category_cache[category_name] = category
            items.append(MenuItem(category=category, **MenuImportService.build_item_fields(row)))

        MenuItem.objects.bulk_create(items)

        summary = {"categories": len(category_cache), "items": len(items)}
        logger.info(
            f"Replaced menu for restaurant {restaurant_id}: "
            f"{summary['categories']} categories, {summary['items']} items"
        )
        return summary
