from core.celery import app as celery_app

__all__ = ('celery_app',)

# Register tasks explicitly
from .delivery import deliver_campaign_message  # noqa: E402,F401
