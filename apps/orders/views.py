"""Order API views."""

import logging
from django.core.exceptions import ValidationError as DjangoValidationError
from django.shortcuts import get_object_or_404
from rest_framework import generics, status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema
from django_filters.rest_framework import DjangoFilterBackend

from .filters import OrderFilter
from .models import Order
from .pricing import PricingEngine
from .service import OrderService, customer_stats, orders_visible_to
from .timeline import build_tracking_view
from . import serializers as sz

logger = logging.getLogger("swiftcargo.orders")
order_service = OrderService()


def _require_employee(request):
    if not request.user.is_employee:
        return Response({"error": "Employee access required."}, status=status.HTTP_403_FORBIDDEN)
    return None


def _invalid(exc: DjangoValidationError):
    return Response({"error": " ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)


def _conflict(exc: ValueError):
    logger.info("Rejected lifecycle change: %s", exc)
    return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)


def _detail(order):
    order = Order.objects.select_related("customer").prefetch_related("history__actor").get(pk=order.pk)
    return sz.OrderDetailSerializer(order).data


# ── POST /api/orders/estimate/ ────────────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="Live shipping cost estimate",
               request=sz.CostEstimateSerializer, responses=sz.CostBreakdownSerializer)
class CostEstimateView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    engine = PricingEngine()

    def post(self, request):
        ser = sz.CostEstimateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        try:
            breakdown = self.engine.calculate(d["package_weight"], d["transport_mode"], d["urgent_delivery"])
        except DjangoValidationError as exc:
            return _invalid(exc)
        return Response(sz.CostBreakdownSerializer(breakdown).data)


# ── POST /api/orders/create/ ──────────────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="Create an order (customer: own; employee: on behalf of a customer)")
class OrderCreateView(generics.CreateAPIView):
    permission_classes = [permissions.IsAuthenticated]

    def get_serializer_class(self):
        if getattr(self.request.user, "is_employee", False):
            return sz.EmployeeOrderCreateSerializer
        return sz.OrderCreateSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        customer = data.pop("customer", request.user)
        try:
            order = order_service.create_order(customer=customer, data=data, actor=request.user)
        except DjangoValidationError as exc:
            return _invalid(exc)
        return Response(_detail(order), status=status.HTTP_201_CREATED)


# ── GET /api/orders/ ──────────────────────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="List orders visible to the authenticated user")
class OrderListView(generics.ListAPIView):
    serializer_class   = sz.OrderListSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends    = [DjangoFilterBackend]
    filterset_class    = OrderFilter

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()
        return orders_visible_to(self.request.user)


# ── GET /api/orders/stats/ ────────────────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="Customer dashboard stats")
class OrderStatsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(customer_stats(request.user))


# ── GET /api/orders/{order_number}/ ───────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="Order detail with status history")
class OrderDetailView(generics.RetrieveAPIView):
    serializer_class   = sz.OrderDetailSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field       = "order_number"

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()
        return orders_visible_to(self.request.user).prefetch_related("history__actor")


# ── GET /api/orders/{order_number}/tracking/ ──────────────────────────────────
@extend_schema(tags=["Orders"], summary="Simulated tracking timeline and delivery estimate")
class OrderTrackingView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, order_number):
        order = get_object_or_404(orders_visible_to(request.user), order_number=order_number)
        try:
            view = build_tracking_view(order)
        except DjangoValidationError as exc:
            return _invalid(exc)
        return Response({
            "order_number":    order.order_number,
            "tracking_number": order.tracking_number,
            "status":          order.status,
            "status_label":    order.status_label,
            "transport_mode":  order.transport_mode,
            "urgent_delivery": order.urgent_delivery,
            **sz.TrackingViewSerializer(view).data,
        })


# ── POST /api/orders/{order_number}/cancel/ ───────────────────────────────────
@extend_schema(tags=["Orders"], summary="Cancel own pending order", request=None)
class OrderCancelView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, order_number):
        order = get_object_or_404(Order, order_number=order_number, customer=request.user)
        try:
            order = order_service.cancel_order(order, actor=request.user)
        except ValueError as exc:
            return _conflict(exc)
        return Response({"message": f"Order {order.order_number} has been cancelled.",
                         "order": _detail(order)})


# ── Employee operations ───────────────────────────────────────────────────────
@extend_schema(tags=["Orders"], summary="Confirm a pending order", request=sz.ConfirmOrderSerializer)
class OrderConfirmView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, order_number):
        denied = _require_employee(request)
        if denied:
            return denied
        order = get_object_or_404(Order, order_number=order_number)
        ser = sz.ConfirmOrderSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            order = order_service.confirm_order(
                order, actor=request.user,
                tracking_number=ser.validated_data.get("tracking_number") or None,
            )
        except ValueError as exc:
            return _conflict(exc)
        except DjangoValidationError as exc:
            return _invalid(exc)
        return Response({"message": "Order confirmed and tracking number assigned.",
                         "order": _detail(order)})


@extend_schema(tags=["Orders"], summary="Move an order to another status", request=sz.StatusUpdateSerializer)
class OrderStatusUpdateView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, order_number):
        denied = _require_employee(request)
        if denied:
            return denied
        order = get_object_or_404(Order, order_number=order_number)
        ser = sz.StatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        try:
            order = order_service.update_status(
                order, d["status"], actor=request.user,
                tracking_number=d.get("tracking_number") or None,
                note=d.get("note", ""),
            )
        except ValueError as exc:
            return _conflict(exc)
        except DjangoValidationError as exc:
            return _invalid(exc)
        return Response({"message": f"Order status updated to {order.status_label}.",
                         "order": _detail(order)})


@extend_schema(tags=["Orders"], summary="Edit order details (pending / confirmed only)",
               request=sz.OrderEditSerializer)
class OrderEditView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, order_number):
        denied = _require_employee(request)
        if denied:
            return denied
        order = get_object_or_404(Order, order_number=order_number)
        ser = sz.OrderEditSerializer(order, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        try:
            order, recalculated = order_service.edit_order(order, ser.validated_data, actor=request.user)
        except ValueError as exc:
            return _conflict(exc)
        except DjangoValidationError as exc:
            return _invalid(exc)
        message = "Order updated successfully."
        if recalculated:
            message += " Costs have been recalculated."
        return Response({"message": message, "recalculated": recalculated, "order": _detail(order)})


@extend_schema(tags=["Orders"], summary="Soft-delete an order (pending / confirmed only)", request=None)
class OrderDeleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, order_number):
        denied = _require_employee(request)
        if denied:
            return denied
        order = get_object_or_404(Order, order_number=order_number)
        try:
            order = order_service.delete_order(order, actor=request.user)
        except ValueError as exc:
            return _conflict(exc)
        return Response({"message": f"Order {order.order_number} has been deleted."})
