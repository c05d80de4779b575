from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Account


@admin.register(Account)
class AccountAdmin(BaseUserAdmin):
    list_display  = ("email", "full_name", "role", "status", "created_at", "last_login")
    list_filter   = ("role", "status", "is_staff")
    search_fields = ("email", "first_name", "last_name", "phone")
    ordering      = ("-created_at",)
    readonly_fields = ("created_at", "updated_at", "last_login")
    fieldsets = (
        (None,          {"fields": ("email", "password")}),
        ("Personal",    {"fields": ("first_name", "last_name", "phone", "address")}),
        ("Role",        {"fields": ("role", "status")}),
        ("Permissions", {"fields": ("is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates",       {"fields": ("last_login", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "first_name", "last_name", "role", "password1", "password2")}),
    )
