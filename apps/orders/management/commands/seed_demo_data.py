"""
Management command: seed demo accounts and orders.

Usage:
    python manage.py seed_demo_data [--password PASSWORD]
"""

from decimal import Decimal
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from apps.orders.models import Order
from apps.orders.service import OrderService
from apps.orders.status import OrderStatus, CANONICAL_SEQUENCE

Account = get_user_model()

ACCOUNTS = [
    ("admin@swiftcargo.test",    "Ada",    "Admin",    Account.Role.ADMIN),
    ("employee@swiftcargo.test", "Eli",    "Employee", Account.Role.EMPLOYEE),
    ("alice@swiftcargo.test",    "Alice",  "Mensah",   Account.Role.CUSTOMER),
    ("bob@swiftcargo.test",      "Bob",    "Okafor",   Account.Role.CUSTOMER),
]

ORDERS = [
    # customer, pickup, delivery, weight, mode, urgent, final status
    ("alice@swiftcargo.test", "12 Harbour Road\nAccra, Ghana",     "4 Market Street\nLagos, Nigeria",
     "2.50",  "air",   True,  OrderStatus.IN_TRANSIT),
    ("alice@swiftcargo.test", "12 Harbour Road\nAccra, Ghana",     "Unit 9, Dock Lane\nRotterdam, Netherlands",
     "340.00", "ocean", False, OrderStatus.CONFIRMED),
    ("alice@swiftcargo.test", "12 Harbour Road\nAccra, Ghana",     "77 Ring Road\nKumasi, Ghana",
     "18.00", "land",  False, OrderStatus.DELIVERED),
    ("bob@swiftcargo.test",   "5 Allen Avenue\nIkeja, Nigeria",    "22 Kenyatta Avenue\nNairobi, Kenya",
     "6.75",  "air",   False, OrderStatus.PENDING),
    ("bob@swiftcargo.test",   "5 Allen Avenue\nIkeja, Nigeria",    "3 Broad Street\nAbuja, Nigeria",
     "45.00", "land",  True,  OrderStatus.PROCESSING),
    ("bob@swiftcargo.test",   "5 Allen Avenue\nIkeja, Nigeria",    "14 Long Street\nCape Town, South Africa",
     "120.00", "ocean", False, OrderStatus.CANCELLED),
]


def _skip_notification(order_id, status):
    pass


class Command(BaseCommand):
    help = "Seed demo accounts (admin, employee, customers) and orders in several statuses"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="Demo12345", help="Password for every demo account")

    def handle(self, *args, **options):
        created_accounts = 0
        for email, first, last, role in ACCOUNTS:
            account, created = Account.objects.get_or_create(
                email=email,
                defaults={
                    "first_name": first,
                    "last_name":  last,
                    "role":       role,
                    "status":     Account.Status.ACTIVE,
                    "is_staff":   role == Account.Role.ADMIN,
                },
            )
            if created:
                account.set_password(options["password"])
                account.save(update_fields=["password"])
                created_accounts += 1

        if Order.objects.exists():
            self.stdout.write(self.style.WARNING(
                f"Seeded {created_accounts} accounts; orders already present, skipping orders."
            ))
            return

        employee = Account.objects.get(email="employee@swiftcargo.test")
        service  = OrderService(notifier=_skip_notification)
        for email, pickup, delivery, weight, mode, urgent, final in ORDERS:
            customer = Account.objects.get(email=email)
            order = service.create_order(customer, {
                "pickup_address":      pickup,
                "delivery_address":    delivery,
                "package_weight":      Decimal(weight),
                "package_description": f"Demo parcel ({mode})",
                "transport_mode":      mode,
                "urgent_delivery":     urgent,
            })
            if final == OrderStatus.CANCELLED:
                service.cancel_order(order, actor=customer)
                continue
            for step in CANONICAL_SEQUENCE[1:CANONICAL_SEQUENCE.index(final) + 1]:
                order = service.update_status(order, step, actor=employee)

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {created_accounts} accounts and {len(ORDERS)} orders."
        ))
