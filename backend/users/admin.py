from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ("email",)
    list_display = ("email", "first_name", "last_name", "email_verified", "is_staff", "created_at")
    list_filter = ("email_verified", "is_staff", "is_active")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("config_key", "created_at", "last_login", "password")

    fieldsets = (
        (None, {"fields": ("email", "password", "config_key")}),
        ("Personal info", {"fields": ("first_name", "last_name")}),
        ("Status", {"fields": ("email_verified", "is_active", "is_staff", "is_superuser")}),
        ("Dates", {"fields": ("last_login", "created_at")}),
    )
