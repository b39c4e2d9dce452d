from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("menu_item", "name", "quantity", "price")
    readonly_fields = ("name", "price")
    raw_id_fields = ("menu_item",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "table", "status", "total", "currency", "created_at")
    list_filter = ("status", "table__restaurant")
    search_fields = ("id", "table__restaurant__name")
    readonly_fields = ("total", "currency", "created_at", "updated_at")
    list_select_related = ("table", "table__restaurant")
    inlines = [OrderItemInline]
