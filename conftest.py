"""
pytest configuration for SwiftCargo.
Sets Django settings and provides shared fixtures.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.conf import settings


def pytest_configure(config):
    """Configure Django settings before tests run."""
    if not settings.configured:
        settings.configure(
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME":   ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.sessions",
                "django.contrib.messages",
                "django.contrib.staticfiles",
                "rest_framework",
                "rest_framework_simplejwt",
                "drf_spectacular",
                "django_filters",
                "corsheaders",
                "apps.authentication",
                "apps.orders",
                "apps.notifications",
                "apps.tracking",
                "apps.ops",
            ],
            AUTH_USER_MODEL="authentication.Account",
            REST_FRAMEWORK={
                "DEFAULT_AUTHENTICATION_CLASSES": [
                    "rest_framework_simplejwt.authentication.JWTAuthentication",
                ],
                "DEFAULT_PERMISSION_CLASSES": [
                    "rest_framework.permissions.IsAuthenticated",
                ],
                "DEFAULT_FILTER_BACKENDS": [
                    "django_filters.rest_framework.DjangoFilterBackend",
                ],
                "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
                "PAGE_SIZE": 20,
                "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
            },
            SPECTACULAR_SETTINGS={
                "TITLE": "SwiftCargo API",
                "VERSION": "test",
                "SERVE_INCLUDE_SCHEMA": False,
            },
            SECRET_KEY="test-secret-key-not-for-production",
            DEBUG=True,
            USE_TZ=True,
            TIME_ZONE="UTC",
            ROOT_URLCONF="swiftcargo.urls",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            TEMPLATES=[{
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [],
                "APP_DIRS": True,
                "OPTIONS": {
                    "context_processors": [
                        "django.template.context_processors.debug",
                        "django.template.context_processors.request",
                        "django.contrib.auth.context_processors.auth",
                        "django.contrib.messages.context_processors.messages",
                    ],
                },
            }],
            MIDDLEWARE=[
                "django.middleware.security.SecurityMiddleware",
                "corsheaders.middleware.CorsMiddleware",
                "django.contrib.sessions.middleware.SessionMiddleware",
                "django.middleware.common.CommonMiddleware",
                "django.middleware.csrf.CsrfViewMiddleware",
                "django.contrib.auth.middleware.AuthenticationMiddleware",
                "django.contrib.messages.middleware.MessageMiddleware",
            ],
            STATIC_URL="/static/",
            STATIC_ROOT="/tmp/staticfiles_test",
            SMS_GATEWAY_URL="http://sms-mock:8003",
            DEFAULT_FROM_EMAIL="SwiftCargo <no-reply@swiftcargo.test>",
            CACHES={
                "default": {
                    "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                }
            },
            CELERY_BROKER_URL="memory://",
            CELERY_TASK_ALWAYS_EAGER=True,   # Execute tasks synchronously in tests
            CELERY_TASK_EAGER_PROPAGATES=True,
            CORS_ALLOW_ALL_ORIGINS=True,
            SIMPLE_JWT={
                "ACCESS_TOKEN_LIFETIME":  timedelta(hours=8),
                "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
                "ALGORITHM": "HS256",
                "AUTH_HEADER_TYPES": ("Bearer",),
            },
        )
    # Make the project Celery app current before any task module is imported
    import swiftcargo  # noqa: F401


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════

class FixedRandom:
    """randint() always returns `value`, clamped to the requested range."""

    def __init__(self, value):
        self.value = value

    def randint(self, a, b):
        return max(a, min(self.value, b))


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def make_account(db):
    from django.contrib.auth import get_user_model
    Account = get_user_model()

    def _make(email=None, role="customer", password="Secret123", **kwargs):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        kwargs.setdefault("first_name", "Test")
        kwargs.setdefault("last_name", role.title())
        return Account.objects.create_user(email=email, password=password, role=role, **kwargs)
    return _make


@pytest.fixture
def customer(make_account):
    return make_account(email="carla@example.com", first_name="Carla", last_name="Customer")


@pytest.fixture
def other_customer(make_account):
    return make_account(email="oscar@example.com", first_name="Oscar", last_name="Other")


@pytest.fixture
def employee(make_account):
    return make_account(email="erin@swiftcargo.test", role="employee", first_name="Erin")


@pytest.fixture
def admin(make_account):
    return make_account(email="adam@swiftcargo.test", role="admin", first_name="Adam", is_staff=True)


def _client_for(user):
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def customer_client(customer):
    return _client_for(customer)


@pytest.fixture
def employee_client(employee):
    return _client_for(employee)


@pytest.fixture
def admin_client(admin):
    return _client_for(admin)


@pytest.fixture
def order_service():
    """OrderService with the rate variation pinned to 0% and notifications recorded."""
    from apps.orders.pricing import PricingEngine
    from apps.orders.service import OrderService

    sent = []
    service = OrderService(
        pricing_engine=PricingEngine(rng=FixedRandom(0)),
        notifier=lambda order_id, status: sent.append((order_id, status)),
    )
    service.sent = sent
    return service


@pytest.fixture
def make_order(order_service, customer):
    def _make(owner=None, **overrides):
        data = {
            "pickup_address":      "1 Depot Road\nAccra, Ghana",
            "delivery_address":    "22 Kenyatta Avenue\nNairobi, Kenya",
            "package_weight":      Decimal("10"),
            "package_description": "Books",
            "transport_mode":      "land",
            "urgent_delivery":     False,
        }
        data.update(overrides)
        return order_service.create_order(owner or customer, data)
    return _make
