# Load the Celery app with Django so deliver_campaign_message binds to it
from .celery import app as celery_app  # noqa: F401

__all__ = ("celery_app",)
