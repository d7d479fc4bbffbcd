import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings.local')

app = Celery('minicrm')
app.config_from_object('django.conf:settings', namespace='CELERY')

# Delivery jobs live in the top-level tasks package, not inside an app
app.autodiscover_tasks(['tasks'])
