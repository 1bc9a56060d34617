"""Memberships app configuration"""
from django.apps import AppConfig
from django.db.models.signals import post_migrate


class MembershipsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.memberships'
    label = 'memberships'
    verbose_name = 'Memberships'

    def ready(self):
        from . import signals
        from .hooks import load_settings_filters

        load_settings_filters()
        post_migrate.connect(
            signals.register_jobs_after_migrate,
            sender=self,
            dispatch_uid='memberships.register_jobs_after_migrate',
        )
