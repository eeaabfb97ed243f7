import os

from celery import Celery
from django.conf import settings

# Match the settings path used by manage.py.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "orderfellow_backend.settings.dev")

app = Celery("orderfellow_backend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks(lambda: settings.INSTALLED_APPS)
