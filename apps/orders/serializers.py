"""Order serializers."""

from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Order, OrderStatusChange
from .status import OrderStatus, status_label

Account = get_user_model()

DIMENSION_FIELDS = ("package_length", "package_width", "package_height")


class OrderStatusChangeSerializer(serializers.ModelSerializer):
    actor_name = serializers.CharField(source="actor.full_name", read_only=True, default=None)
    to_label   = serializers.SerializerMethodField()

    class Meta:
        model  = OrderStatusChange
        fields = ["from_status", "to_status", "to_label", "actor_name", "note", "occurred_at"]

    def get_to_label(self, obj):
        return status_label(obj.to_status)


class OrderCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model  = Order
        fields = [
            "pickup_address", "delivery_address",
            "package_weight", "package_length", "package_width", "package_height",
            "package_description", "transport_mode", "urgent_delivery", "special_instructions",
        ]


class EmployeeOrderCreateSerializer(OrderCreateSerializer):
    """Order placed by staff on behalf of an active customer; dimensions are mandatory."""
    customer = serializers.PrimaryKeyRelatedField(
        queryset=Account.objects.filter(role=Account.Role.CUSTOMER, status=Account.Status.ACTIVE),
    )

    class Meta(OrderCreateSerializer.Meta):
        fields = ["customer"] + OrderCreateSerializer.Meta.fields
        extra_kwargs = {
            name: {"required": True, "allow_null": False, "min_value": Decimal("0.01")}
            for name in DIMENSION_FIELDS
        }


class OrderListSerializer(serializers.ModelSerializer):
    customer_name   = serializers.CharField(source="customer.full_name", read_only=True)
    customer_email  = serializers.EmailField(source="customer.email", read_only=True)

    class Meta:
        model  = Order
        fields = [
            "id", "order_number", "tracking_number", "status", "status_label",
            "customer_name", "customer_email",
            "transport_mode", "transport_label", "urgent_delivery",
            "package_description", "total_cost", "created_at",
        ]


class OrderDetailSerializer(serializers.ModelSerializer):
    customer_name  = serializers.CharField(source="customer.full_name", read_only=True)
    customer_email = serializers.EmailField(source="customer.email", read_only=True)
    history        = OrderStatusChangeSerializer(many=True, read_only=True)

    class Meta:
        model  = Order
        fields = [
            "id", "order_number", "tracking_number", "status", "status_label", "is_editable",
            "customer_name", "customer_email",
            "pickup_address", "delivery_address",
            "package_weight", "package_length", "package_width", "package_height",
            "package_description", "transport_mode", "transport_label",
            "urgent_delivery", "special_instructions",
            "base_cost", "urgent_surcharge", "total_cost",
            "history", "created_at", "updated_at",
        ]


class OrderEditSerializer(serializers.ModelSerializer):
    """All fields optional; only those present are changed."""

    class Meta:
        model  = Order
        fields = OrderCreateSerializer.Meta.fields
        extra_kwargs = {name: {"required": False} for name in OrderCreateSerializer.Meta.fields}

    def validate(self, data):
        for name in DIMENSION_FIELDS:
            value = data.get(name)
            if value is not None and value <= 0:
                raise serializers.ValidationError({name: "Must be greater than zero."})
        return data


class StatusUpdateSerializer(serializers.Serializer):
    status          = serializers.ChoiceField(choices=OrderStatus.choices)
    tracking_number = serializers.CharField(required=False, allow_blank=True, max_length=20)
    note            = serializers.CharField(required=False, allow_blank=True, max_length=255)


class ConfirmOrderSerializer(serializers.Serializer):
    tracking_number = serializers.CharField(required=False, allow_blank=True, max_length=20)


# ── Pricing / tracking output ─────────────────────────────────────────────────
class CostEstimateSerializer(serializers.Serializer):
    """Estimate input. Range and mode checks are left to the pricing engine."""
    package_weight  = serializers.DecimalField(max_digits=12, decimal_places=3)
    transport_mode  = serializers.CharField()
    urgent_delivery = serializers.BooleanField(default=False)


class CostBreakdownSerializer(serializers.Serializer):
    transport_mode   = serializers.CharField()
    weight           = serializers.DecimalField(max_digits=12, decimal_places=3)
    urgent           = serializers.BooleanField()
    calculated_cost  = serializers.DecimalField(max_digits=12, decimal_places=2)
    minimum_charge   = serializers.DecimalField(max_digits=10, decimal_places=2)
    base_cost        = serializers.DecimalField(max_digits=10, decimal_places=2)
    urgent_surcharge = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_cost       = serializers.DecimalField(max_digits=10, decimal_places=2)
    minimum_applied  = serializers.BooleanField()
    effective_rate   = serializers.DecimalField(max_digits=10, decimal_places=2)


class TimelineEventSerializer(serializers.Serializer):
    status       = serializers.CharField()
    label        = serializers.CharField()
    icon         = serializers.CharField()
    location     = serializers.CharField()
    timestamp    = serializers.DateTimeField()
    has_happened = serializers.BooleanField()
    is_current   = serializers.BooleanField()
    is_future    = serializers.BooleanField()
    is_cancelled = serializers.BooleanField()


class DeliveryEstimateSerializer(serializers.Serializer):
    status         = serializers.CharField()
    message        = serializers.CharField()
    date           = serializers.DateField(allow_null=True)
    day_name       = serializers.CharField(allow_null=True)
    days_remaining = serializers.IntegerField(allow_null=True)
    is_estimate    = serializers.BooleanField()
    estimated_at   = serializers.DateTimeField(allow_null=True)


class TrackingViewSerializer(serializers.Serializer):
    timeline = TimelineEventSerializer(many=True)
    estimate = DeliveryEstimateSerializer()
