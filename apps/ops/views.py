"""
Operations views:
  - Deep health check (DB, cache, disk)
  - Prometheus-formatted metrics
  - Employee operations dashboard
  - Admin user dashboard
"""

import os
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import connection
from django.db.models import Count, Sum
from django.http import HttpResponse
from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from drf_spectacular.utils import extend_schema

from apps.orders.models import Order
from apps.orders.serializers import OrderListSerializer
from apps.orders.status import OrderStatus

logger = logging.getLogger("swiftcargo.ops")
Account = get_user_model()

REVENUE_EXCLUDED = (OrderStatus.CANCELLED, OrderStatus.DELETED)


# ── GET /api/health/deep/ ─────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Deep health check — DB, cache, disk")
class DeepHealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        checks = {}

        # Database
        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1")
            checks["database"] = "ok"
        except Exception as exc:
            logger.error("Health check: database unavailable: %s", exc)
            checks["database"] = f"error: {exc}"

        # Cache
        try:
            cache.set("healthcheck", "1", 5)
            checks["cache"] = "ok" if cache.get("healthcheck") == "1" else "miss"
        except Exception as exc:
            logger.error("Health check: cache unavailable: %s", exc)
            checks["cache"] = f"error: {exc}"

        # Disk
        try:
            stat    = os.statvfs("/")
            free_gb = (stat.f_bavail * stat.f_frsize) / (1024 ** 3)
            checks["disk_free_gb"] = round(free_gb, 2)
            checks["disk"] = "ok" if free_gb > 1 else "low"
        except (OSError, AttributeError) as exc:
            checks["disk"] = f"error: {exc}"

        overall = "ok" if all(checks.get(k) == "ok" for k in ("database", "cache")) else "degraded"
        return Response({"status": overall, "checks": checks},
                        status=200 if overall == "ok" else 503)


# ── GET /api/ops/metrics/ ────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Prometheus-formatted operational metrics")
class MetricsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.is_employee:
            return Response({"error": "Employee access required."}, status=403)

        order_counts = dict(
            Order.objects.values_list("status").annotate(c=Count("id"))
        )
        revenue = Order.objects.exclude(
            status__in=REVENUE_EXCLUDED
        ).aggregate(t=Sum("total_cost"))["t"] or Decimal("0")
        revenue = Decimal(revenue).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        lines = [
            "# HELP swiftcargo_orders_total Orders by status",
            "# TYPE swiftcargo_orders_total gauge",
        ]
        for status in OrderStatus.values:
            lines.append(f'swiftcargo_orders_total{{status="{status}"}} {order_counts.get(status, 0)}')
        lines += [
            "",
            "# HELP swiftcargo_revenue_total Booked revenue excluding cancelled and deleted orders",
            "# TYPE swiftcargo_revenue_total gauge",
            f"swiftcargo_revenue_total {revenue}",
        ]
        return HttpResponse("\n".join(lines) + "\n", content_type="text/plain; version=0.0.4")


# ── GET /api/ops/dashboard/ ──────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Employee dashboard — order pipeline overview")
class EmployeeDashboardView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.is_employee:
            return Response({"error": "Employee access required."}, status=403)

        orders    = Order.objects.exclude(status=OrderStatus.DELETED)
        today     = timezone.localdate()
        customers = Account.objects.filter(role=Account.Role.CUSTOMER)
        by_mode   = dict(orders.values_list("transport_mode").annotate(c=Count("id")))
        recent    = orders.select_related("customer").order_by("-created_at")[:5]

        return Response({
            "total_orders":       orders.count(),
            "pending_orders":     orders.filter(status=OrderStatus.PENDING).count(),
            "confirmed_orders":   orders.filter(status=OrderStatus.CONFIRMED).count(),
            "orders_today":       orders.filter(created_at__date=today).count(),
            "total_customers":    customers.count(),
            "active_customers":   customers.filter(status=Account.Status.ACTIVE).count(),
            "orders_by_transport": by_mode,
            "recent_orders":      OrderListSerializer(recent, many=True).data,
        })


# ── GET /api/ops/admin-dashboard/ ────────────────────────────────────────────
@extend_schema(tags=["Admin"], summary="Admin dashboard — user base overview")
class AdminDashboardView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.is_admin:
            return Response({"error": "Admin only."}, status=403)

        since = timezone.now() - timedelta(days=30)
        return Response({
            "total_users":     Account.objects.count(),
            "active_users":    Account.objects.filter(status=Account.Status.ACTIVE).count(),
            "new_users_30d":   Account.objects.filter(created_at__gte=since).count(),
            "users_by_role":   dict(Account.objects.values_list("role").annotate(c=Count("id"))),
            "users_by_status": dict(Account.objects.values_list("status").annotate(c=Count("id"))),
        })
