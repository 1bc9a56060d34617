"""
Celery task: check_for_expired_users

Runs daily via Celery Beat. Active members whose expiration is more than
two days in the past are moved to the ``expired`` status.
"""
import logging

from celery import shared_task

from apps.core.logging import bind_correlation_id

logger = logging.getLogger(__name__)


@shared_task(bind=True, ignore_result=True, name='memberships.tasks.check_for_expired_users')
def check_for_expired_users(self):
    from apps.memberships.services import ExpiredMemberSweep

    with bind_correlation_id(self.request.id):
        logger.info('[check_for_expired_users] Running')
        stats = ExpiredMemberSweep.run()
        logger.info('[check_for_expired_users] Complete: %s', stats)
    return stats
