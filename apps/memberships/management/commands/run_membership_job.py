"""
Run a membership job immediately, outside of Celery Beat
"""

from django.core.management.base import BaseCommand, CommandError

from apps.memberships import tasks
from apps.memberships.exceptions import UnknownMembershipJob
from apps.memberships.schedule import (
    CHECK_MEMBER_COUNTS,
    EXPIRED_USERS_CHECK,
    JOB_ALIASES,
    SEND_EXPIRING_SOON_NOTICE,
    resolve_job,
)

JOB_TASKS = {
    EXPIRED_USERS_CHECK: tasks.check_for_expired_users,
    SEND_EXPIRING_SOON_NOTICE: tasks.check_for_soon_to_expire_users,
    CHECK_MEMBER_COUNTS: tasks.check_member_counts,
}


class Command(BaseCommand):
    help = 'Run a membership job synchronously and print its result'

    def add_arguments(self, parser):
        parser.add_argument(
            'job',
            help=f"Job identifier or one of: {', '.join(JOB_ALIASES)}",
        )

    def handle(self, *args, **options):
        try:
            job_name = resolve_job(options['job'])
        except UnknownMembershipJob as exc:
            raise CommandError(exc.message) from exc

        result = JOB_TASKS[job_name]()
        self.stdout.write(self.style.SUCCESS(f"{job_name}: {result}"))
