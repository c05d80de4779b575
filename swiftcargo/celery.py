"""Celery application. Settings are read from Django's CELERY_* namespace."""

import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "swiftcargo.settings")

app = Celery("swiftcargo")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
