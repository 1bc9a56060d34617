"""Celery task: check_member_counts, the daily recount of members per level and status."""
import logging

from celery import shared_task

from apps.core.logging import bind_correlation_id

logger = logging.getLogger(__name__)


@shared_task(bind=True, ignore_result=True, name='memberships.tasks.check_member_counts')
def check_member_counts(self):
    from apps.memberships.services import MemberCountService

    with bind_correlation_id(self.request.id):
        counts = MemberCountService.reconcile()
        logger.info('[check_member_counts] Updated %d counters', len(counts))
    return counts
