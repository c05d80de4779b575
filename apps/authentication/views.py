"""Authentication: registration, login, profile, admin user management."""

import re
import logging
from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework import serializers
from drf_spectacular.utils import extend_schema

from apps.orders.status import ACTIVE_STATUSES, OrderStatus
from .filters import AccountFilter

Account = get_user_model()
logger = logging.getLogger("swiftcargo.auth")

# ── Validators ────────────────────────────────────────────────────────────────
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{7,20}$")


def validate_phone(value):
    if value and not PHONE_PATTERN.match(value):
        raise serializers.ValidationError("Enter a valid phone number.")


def validate_password_strength(value):
    if len(value) < 8:
        raise serializers.ValidationError("Password must be at least 8 characters long.")
    if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
        raise serializers.ValidationError("Password must contain at least one letter and one number.")


# ── Serializers ───────────────────────────────────────────────────────────────
class AccountRegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password_strength])
    phone    = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])

    class Meta:
        model  = Account
        fields = ["email", "first_name", "last_name", "phone", "address", "password"]

    def create(self, validated_data):
        password = validated_data.pop("password")
        account = Account(role=Account.Role.CUSTOMER, status=Account.Status.ACTIVE, **validated_data)
        account.set_password(password)
        account.save()
        return account


class AccountProfileSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])

    class Meta:
        model  = Account
        fields = ["id", "email", "first_name", "last_name", "full_name", "phone", "address",
                  "role", "status", "created_at"]
        read_only_fields = ["id", "email", "full_name", "role", "status", "created_at"]


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password     = serializers.CharField(write_only=True, validators=[validate_password_strength])

    def validate_current_password(self, value):
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value


class AccountAdminSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=False, validators=[validate_password_strength])
    phone    = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])

    class Meta:
        model  = Account
        fields = ["id", "email", "first_name", "last_name", "full_name", "phone", "address",
                  "role", "status", "password", "created_at", "last_login"]
        read_only_fields = ["id", "full_name", "created_at", "last_login"]

    def validate(self, data):
        if self.instance is None and not data.get("password"):
            raise serializers.ValidationError({"password": "Required when creating an account."})
        request = self.context.get("request")
        if self.instance is not None and request and self.instance.pk == request.user.pk:
            if data.get("role", self.instance.role) != Account.Role.ADMIN:
                raise serializers.ValidationError({"role": "You cannot remove your own admin role."})
            if data.get("status", self.instance.status) != Account.Status.ACTIVE:
                raise serializers.ValidationError({"status": "You cannot deactivate your own account."})
        return data

    def create(self, validated_data):
        password = validated_data.pop("password")
        account = Account(**validated_data)
        account.set_password(password)
        account.save()
        return account

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class CustomerDirectorySerializer(serializers.ModelSerializer):
    order_count      = serializers.IntegerField(read_only=True)
    pending_orders   = serializers.IntegerField(read_only=True)
    active_orders    = serializers.IntegerField(read_only=True)
    delivered_orders = serializers.IntegerField(read_only=True)

    class Meta:
        model  = Account
        fields = ["id", "email", "full_name", "phone", "status", "created_at",
                  "order_count", "pending_orders", "active_orders", "delivered_orders"]


def _require_admin(request):
    if request.user.role != Account.Role.ADMIN:
        return Response({"error": "Admin only."}, status=status.HTTP_403_FORBIDDEN)
    return None


# ── Views ─────────────────────────────────────────────────────────────────────
@extend_schema(tags=["Auth"])
class RegisterView(generics.CreateAPIView):
    """POST /api/auth/register/ — Create a new customer account."""
    queryset         = Account.objects.all()
    serializer_class = AccountRegisterSerializer
    permission_classes = [AllowAny]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = serializer.save()
        logger.info("Customer account registered: %s", account.email)
        return Response(
            {"message": "Account created. Please log in.", "id": str(account.id)},
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Auth"])
class ProfileView(generics.RetrieveUpdateAPIView):
    """GET/PATCH /api/auth/me/ — Retrieve or update own profile."""
    serializer_class   = AccountProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


@extend_schema(tags=["Auth"], request=PasswordChangeSerializer)
class PasswordChangeView(APIView):
    """POST /api/auth/me/password/ — Change own password."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = PasswordChangeSerializer(data=request.data, context={"request": request})
        ser.is_valid(raise_exception=True)
        request.user.set_password(ser.validated_data["new_password"])
        request.user.save(update_fields=["password", "updated_at"])
        return Response({"message": "Password updated."})


@extend_schema(tags=["Admin"], summary="List or create accounts (Admin only)")
class AccountListCreateView(generics.ListCreateAPIView):
    serializer_class   = AccountAdminSerializer
    permission_classes = [IsAuthenticated]
    queryset           = Account.objects.all()
    filterset_class    = AccountFilter

    def list(self, request, *args, **kwargs):
        return _require_admin(request) or super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        denied = _require_admin(request)
        if denied:
            return denied
        response = super().create(request, *args, **kwargs)
        logger.info("Account %s created by admin %s", response.data["email"], request.user.email)
        return response


@extend_schema(tags=["Admin"], summary="Retrieve or update an account (Admin only)")
class AccountDetailView(generics.RetrieveUpdateAPIView):
    serializer_class   = AccountAdminSerializer
    permission_classes = [IsAuthenticated]
    queryset           = Account.objects.all()

    def retrieve(self, request, *args, **kwargs):
        return _require_admin(request) or super().retrieve(request, *args, **kwargs)

    def update(self, request, *args, **kwargs):
        denied = _require_admin(request)
        if denied:
            return denied
        response = super().update(request, *args, **kwargs)
        logger.info("Account %s updated by admin %s", response.data["email"], request.user.email)
        return response


@extend_schema(tags=["Staff"], summary="Customer directory with order counts (Employee / Admin)")
class CustomerDirectoryView(generics.ListAPIView):
    """GET /api/auth/customers/ — look up customers to book orders on their behalf."""
    serializer_class   = CustomerDirectorySerializer
    permission_classes = [IsAuthenticated]
    filterset_class    = AccountFilter

    def get_queryset(self):
        visible = Q(orders__status__in=[s for s in OrderStatus if s != OrderStatus.DELETED])
        return (
            Account.objects.filter(role=Account.Role.CUSTOMER)
            .annotate(
                order_count=Count("orders", filter=visible),
                pending_orders=Count("orders", filter=Q(orders__status=OrderStatus.PENDING)),
                active_orders=Count("orders", filter=Q(orders__status__in=ACTIVE_STATUSES)),
                delivered_orders=Count("orders", filter=Q(orders__status=OrderStatus.DELIVERED)),
            )
            .order_by("last_name", "first_name")
        )

    def list(self, request, *args, **kwargs):
        if not request.user.is_employee:
            return Response({"error": "Employee access required."}, status=status.HTTP_403_FORBIDDEN)
        return super().list(request, *args, **kwargs)
