"""
Celery configuration for the catalog sync service.

DJANGO_SETTINGS_MODULE is set before the app is created so that Celery
reads the Django settings (prefix CELERY_).
"""

import os

from celery import Celery
from celery.signals import task_prerun

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("catalog_sync")

# Reads Django settings with the CELERY_ prefix
app.config_from_object("django.conf:settings", namespace="CELERY")

# Discovers tasks.py in every installed app
app.autodiscover_tasks()


@task_prerun.connect
def _bind_task_correlation_id(task_id=None, **kwargs):
    from modules.core.middleware import bind_correlation_id

    bind_correlation_id(task_id)
