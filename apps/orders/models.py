"""
Order models.
An Order moves through the lifecycle in apps.orders.status; its cost fields
are written only from a pricing CostBreakdown.
"""

import uuid
from decimal import Decimal
from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator

from .status import OrderStatus, TransportMode, EDITABLE_STATUSES, status_label


class Order(models.Model):
    """Customer shipping order."""

    Status    = OrderStatus
    Transport = TransportMode

    id               = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number     = models.CharField(max_length=20, unique=True)
    tracking_number  = models.CharField(max_length=20, unique=True, null=True, blank=True)
    customer         = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT,
                                         related_name="orders")

    pickup_address   = models.TextField()
    delivery_address = models.TextField()

    package_weight   = models.DecimalField(max_digits=7, decimal_places=2,
                                           validators=[MinValueValidator(Decimal("0.01")),
                                                       MaxValueValidator(Decimal("1000"))])
    package_length   = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    package_width    = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    package_height   = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    package_description = models.TextField()

    transport_mode   = models.CharField(max_length=10, choices=TransportMode.choices)
    urgent_delivery  = models.BooleanField(default=False)
    special_instructions = models.TextField(blank=True)

    # Cost snapshot — always total_cost == base_cost + urgent_surcharge
    base_cost        = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    urgent_surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_cost       = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    status           = models.CharField(max_length=12, choices=OrderStatus.choices,
                                        default=OrderStatus.PENDING)
    created_at       = models.DateTimeField(auto_now_add=True)
    updated_at       = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes  = [
            models.Index(fields=["status"],             name="order_status_idx"),
            models.Index(fields=["customer", "status"], name="order_customer_status_idx"),
            models.Index(fields=["transport_mode"],     name="order_transport_idx"),
            models.Index(fields=["created_at"],         name="order_created_idx"),
        ]

    def __str__(self):
        return f"{self.order_number} [{self.status}]"

    def apply_costs(self, breakdown):
        self.base_cost        = breakdown.base_cost
        self.urgent_surcharge = breakdown.urgent_surcharge
        self.total_cost       = breakdown.base_cost + breakdown.urgent_surcharge

    @property
    def status_label(self):
        return status_label(self.status)

    @property
    def transport_label(self):
        return TransportMode(self.transport_mode).label

    @property
    def is_editable(self):
        return self.status in EDITABLE_STATUSES


class OrderStatusChange(models.Model):
    """Append-only record of every status transition and edit."""
    order       = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="history")
    from_status = models.CharField(max_length=12, blank=True)
    to_status   = models.CharField(max_length=12)
    actor       = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True)
    note        = models.CharField(max_length=255, blank=True)
    occurred_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["occurred_at", "id"]
