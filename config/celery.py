"""Celery application bootstrap for the membership jobs."""

import os
from celery import Celery


os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('config')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

if os.name == 'nt':
    # Windows workers must run in solo mode
    app.conf.worker_pool = 'solo'
