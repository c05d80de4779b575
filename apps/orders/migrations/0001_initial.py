import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id",               models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_number",     models.CharField(max_length=20, unique=True)),
                ("tracking_number",  models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ("pickup_address",   models.TextField()),
                ("delivery_address", models.TextField()),
                ("package_weight",   models.DecimalField(
                    decimal_places=2, max_digits=7,
                    validators=[
                        django.core.validators.MinValueValidator(Decimal("0.01")),
                        django.core.validators.MaxValueValidator(Decimal("1000")),
                    ],
                )),
                ("package_length",   models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True)),
                ("package_width",    models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True)),
                ("package_height",   models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True)),
                ("package_description", models.TextField()),
                ("transport_mode",   models.CharField(
                    choices=[("land", "Land Transport"), ("air", "Air Transport"), ("ocean", "Ocean Transport")],
                    max_length=10,
                )),
                ("urgent_delivery",  models.BooleanField(default=False)),
                ("special_instructions", models.TextField(blank=True)),
                ("base_cost",        models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("urgent_surcharge", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("total_cost",       models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("status", models.CharField(
                    choices=[
                        ("pending",    "Pending Confirmation"),
                        ("confirmed",  "Confirmed"),
                        ("processing", "Processing"),
                        ("in_transit", "In Transit"),
                        ("delivered",  "Delivered"),
                        ("cancelled",  "Cancelled"),
                        ("deleted",    "Deleted"),
                    ],
                    default="pending",
                    max_length=12,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("customer", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="orders",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="OrderStatusChange",
            fields=[
                ("id",          models.BigAutoField(auto_created=True, primary_key=True, serialize=False)),
                ("from_status", models.CharField(blank=True, max_length=12)),
                ("to_status",   models.CharField(max_length=12)),
                ("note",        models.CharField(blank=True, max_length=255)),
                ("occurred_at", models.DateTimeField(auto_now_add=True)),
                ("actor", models.ForeignKey(
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    to=settings.AUTH_USER_MODEL,
                )),
                ("order", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="history",
                    to="orders.order",
                )),
            ],
            options={"ordering": ["occurred_at", "id"]},
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["status"], name="order_status_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["customer", "status"], name="order_customer_status_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["transport_mode"], name="order_transport_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["created_at"], name="order_created_idx"),
        ),
    ]
