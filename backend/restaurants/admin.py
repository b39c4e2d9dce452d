from django.contrib import admin

from .models import MenuCategory, MenuItem, Restaurant, Table


class TableInline(admin.TabularInline):
    model = Table
    extra = 0
    fields = ("table_number",)


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "number_of_tables", "phone", "created_at")
    search_fields = ("name", "owner__email", "config_key")
    readonly_fields = ("config_key", "created_at", "updated_at")
    raw_id_fields = ("owner",)
    inlines = [TableInline]


class MenuItemInline(admin.TabularInline):
    model = MenuItem
    extra = 0
    fields = ("name", "price", "currency", "is_available")


@admin.register(MenuCategory)
class MenuCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "restaurant")
    list_filter = ("restaurant",)
    search_fields = ("name",)
    inlines = [MenuItemInline]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "currency", "is_available")
    list_filter = ("is_available", "currency", "category__restaurant")
    search_fields = ("name", "description")
    list_select_related = ("category", "category__restaurant")
