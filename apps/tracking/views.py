"""
Public tracking: look up an order by tracking number or order number
without logging in. Only city-level address lines are exposed; no customer
identity, costs or special instructions.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema

from apps.orders.models import Order
from apps.orders.serializers import TrackingViewSerializer
from apps.orders.service import find_for_public_tracking, sanitize_address_for_public
from apps.orders.timeline import build_tracking_view


class PublicOrderSerializer(serializers.ModelSerializer):
    pickup_location   = serializers.SerializerMethodField()
    delivery_location = serializers.SerializerMethodField()

    class Meta:
        model  = Order
        fields = [
            "order_number", "tracking_number", "status", "status_label",
            "transport_mode", "transport_label", "urgent_delivery",
            "pickup_location", "delivery_location", "created_at",
        ]

    def get_pickup_location(self, obj):
        return sanitize_address_for_public(obj.pickup_address)

    def get_delivery_location(self, obj):
        return sanitize_address_for_public(obj.delivery_address)


@extend_schema(tags=["Tracking"], summary="Public order tracking by tracking or order number")
class PublicTrackingView(APIView):
    """GET /api/track/{identifier}/"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, identifier):
        order = find_for_public_tracking(identifier.strip())
        if order is None:
            return Response({"error": "No order found with that tracking or order number."}, status=404)
        try:
            view = build_tracking_view(order)
        except DjangoValidationError as exc:
            return Response({"error": " ".join(exc.messages)}, status=400)
        return Response({
            **PublicOrderSerializer(order).data,
            **TrackingViewSerializer(view).data,
        })
