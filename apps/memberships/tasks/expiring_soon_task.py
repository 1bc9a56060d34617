"""
Celery task: check_for_soon_to_expire_users

Runs daily via Celery Beat. Sends one renewal reminder per membership
period to members expiring within the configured lead time.
"""
import logging

from celery import shared_task

from apps.core.logging import bind_correlation_id

logger = logging.getLogger(__name__)


@shared_task(bind=True, ignore_result=True, name='memberships.tasks.check_for_soon_to_expire_users')
def check_for_soon_to_expire_users(self):
    from apps.memberships.services import RenewalReminderService

    with bind_correlation_id(self.request.id):
        logger.info('[check_for_soon_to_expire_users] Running')
        stats = RenewalReminderService.run()
        logger.info('[check_for_soon_to_expire_users] Complete: %s', stats)
    return stats
