from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from users.models import generate_config_key


class Restaurant(models.Model):
    """
    Tenant root. Owned by exactly one user; deleting it cascades to tables,
    menu categories, menu items and orders.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="restaurants",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    founder = models.CharField(max_length=255, blank=True)
    administrator = models.CharField(max_length=255, blank=True)
    number_of_tables = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        help_text=_("How many tables are generated on first access."),
    )
    phone = models.CharField(max_length=50, blank=True)
    address = models.TextField(blank=True)
    config_key = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        help_text=_("Opaque key used by widget integrations instead of the id."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["owner"], name="restaurant_owner_idx"),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.config_key:
            self.config_key = generate_config_key("rest")
        super().save(*args, **kwargs)


class Table(models.Model):
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="tables"
    )
    table_number = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["table_number"]
        constraints = [
            # Also guards lazy generation against concurrent first reads
            models.UniqueConstraint(
                fields=["restaurant", "table_number"],
                name="unique_table_number_per_restaurant",
            ),
        ]

    def __str__(self):
        return f"Table {self.table_number} - {self.restaurant.name}"


class MenuCategory(models.Model):
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="categories"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Menu categories"
        constraints = [
            models.UniqueConstraint(
                fields=["restaurant", "name"],
                name="unique_category_name_per_restaurant",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.restaurant.name})"


class MenuItem(models.Model):
    category = models.ForeignKey(
        MenuCategory, on_delete=models.CASCADE, related_name="items"
    )
    name = models.CharField(max_length=255)
    description = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    currency = models.CharField(max_length=10, default="MDL")
    is_available = models.BooleanField(default=True)
    tags = models.JSONField(default=list, blank=True)
    allergens = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category", "is_available"], name="menuitem_cat_available_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.price} {self.currency})"
