"""
Registration of the daily membership jobs with Celery Beat.

Jobs are stored as ``django_celery_beat`` periodic tasks so the beat
``DatabaseScheduler`` picks them up. A job that is already scheduled is
left untouched.
"""
import logging

from django.utils import timezone
from django_celery_beat.models import IntervalSchedule, PeriodicTask

from apps.memberships.exceptions import UnknownMembershipJob

logger = logging.getLogger(__name__)

EXPIRED_USERS_CHECK = 'memberships_expired_users_check'
SEND_EXPIRING_SOON_NOTICE = 'memberships_send_expiring_soon_notice'
CHECK_MEMBER_COUNTS = 'memberships_check_member_counts'

MEMBERSHIP_JOBS = {
    EXPIRED_USERS_CHECK: 'memberships.tasks.check_for_expired_users',
    SEND_EXPIRING_SOON_NOTICE: 'memberships.tasks.check_for_soon_to_expire_users',
    CHECK_MEMBER_COUNTS: 'memberships.tasks.check_member_counts',
}

JOB_ALIASES = {
    'expired': EXPIRED_USERS_CHECK,
    'expiring': SEND_EXPIRING_SOON_NOTICE,
    'counts': CHECK_MEMBER_COUNTS,
}


def resolve_job(name):
    """Map a job identifier or short alias to its job identifier."""
    job_name = JOB_ALIASES.get(name, name)
    if job_name not in MEMBERSHIP_JOBS:
        raise UnknownMembershipJob(name)
    return job_name


def daily_interval():
    schedule, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period=IntervalSchedule.DAYS,
    )
    return schedule


def is_scheduled(job_name):
    return PeriodicTask.objects.filter(name=job_name, enabled=True).exists()


def setup_cron_jobs():
    """
    Schedule every membership job that is not scheduled yet.

    Returns the identifiers of the jobs created by this call.
    """
    created = []
    interval = None
    for job_name, task_name in MEMBERSHIP_JOBS.items():
        if is_scheduled(job_name):
            continue
        interval = interval or daily_interval()
        PeriodicTask.objects.update_or_create(
            name=job_name,
            defaults={
                'task': task_name,
                'interval': interval,
                'start_time': timezone.now(),
                'enabled': True,
            },
        )
        created.append(job_name)
        logger.debug('Scheduled %s daily', job_name)
    return created


def clear_cron_jobs():
    deleted, _ = PeriodicTask.objects.filter(name__in=list(MEMBERSHIP_JOBS)).delete()
    return deleted
