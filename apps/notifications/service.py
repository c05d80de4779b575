"""
Notification service.
Email goes through Django's mail backend; SMS through the HTTP gateway.
"""

import logging
import requests
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger("swiftcargo.notifications")


class NotificationService:
    """Send Email and SMS notifications. Fails silently — never blocks the main flow."""

    def send_email(self, email: str, subject: str, body: str) -> bool:
        """Send email via the configured backend. Returns True on success."""
        try:
            send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [email])
        except Exception as exc:
            logger.warning("Email to %s failed: %s", email, exc)
            return False
        logger.info("EMAIL → %s | Subject: %s", email, subject)
        return True

    def send_sms(self, phone: str, message: str) -> bool:
        """Send SMS via gateway. Returns True on success."""
        if not phone:
            return False
        try:
            resp = requests.post(
                f"{settings.SMS_GATEWAY_URL}/send",
                json={"phone": phone, "message": message},
                timeout=3,
            )
            if resp.status_code == 200:
                logger.info("SMS sent to %s", phone)
                return True
            logger.warning("SMS gateway returned %s for %s", resp.status_code, phone)
        except requests.RequestException as exc:
            logger.warning("SMS failed for %s: %s", phone, exc)
        return False
