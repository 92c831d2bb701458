from __future__ import annotations

import os

from celery import Celery


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "simadam.settings")

celery_app = Celery("simadam")

# Read config from Django settings, using CELERY_ namespace
celery_app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up common.tasks and any other tasks.py in installed apps
celery_app.autodiscover_tasks()
