from django.contrib import admin
from .models import Order, OrderStatusChange


class OrderStatusChangeInline(admin.TabularInline):
    model           = OrderStatusChange
    extra           = 0
    readonly_fields = ("from_status", "to_status", "actor", "note", "occurred_at")
    can_delete      = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display    = ("order_number", "tracking_number", "status", "customer", "transport_mode",
                       "urgent_delivery", "package_weight", "total_cost", "created_at")
    list_filter     = ("status", "transport_mode", "urgent_delivery")
    search_fields   = ("order_number", "tracking_number", "customer__email", "customer__last_name")
    readonly_fields = ("id", "order_number", "base_cost", "urgent_surcharge", "total_cost",
                       "created_at", "updated_at")
    inlines         = [OrderStatusChangeInline]
    ordering        = ("-created_at",)


@admin.register(OrderStatusChange)
class OrderStatusChangeAdmin(admin.ModelAdmin):
    list_display    = ("order", "from_status", "to_status", "actor", "occurred_at")
    readonly_fields = ("occurred_at",)
