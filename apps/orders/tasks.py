"""Celery tasks for the order lifecycle."""

import logging
from celery import shared_task

logger = logging.getLogger("swiftcargo.tasks")


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_status_change(self, order_id: str, status: str):
    """Email the customer that their order moved to `status`, and text them when a phone is on file."""
    from apps.orders.models import Order
    from apps.orders.service import STATUS_MESSAGES
    from apps.notifications.service import NotificationService

    try:
        order = Order.objects.select_related("customer").get(id=order_id)
    except Order.DoesNotExist:
        logger.error("Order %s not found for status notification", order_id)
        return False

    customer = order.customer
    body = (
        f"Dear {customer.full_name},\n\n"
        f"{STATUS_MESSAGES.get(status, 'Order status updated.')}\n"
        f"Order: {order.order_number}\n"
    )
    if order.tracking_number:
        body += f"Tracking number: {order.tracking_number}\n"
    body += "\nSwiftCargo Team"

    notifier = NotificationService()
    sent = notifier.send_email(
        email=customer.email,
        subject=f"SwiftCargo: order {order.order_number} is {order.status_label}",
        body=body,
    )
    if not sent:
        raise self.retry(exc=RuntimeError(f"Email delivery failed for {order.order_number}"))

    if customer.phone:
        notifier.send_sms(
            customer.phone,
            f"SwiftCargo: order {order.order_number} is {order.status_label}."
            + (f" Tracking: {order.tracking_number}" if order.tracking_number else ""),
        )
    return True
