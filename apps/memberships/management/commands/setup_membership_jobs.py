"""
Register the daily membership jobs with Celery Beat
"""

from django.core.management.base import BaseCommand

from apps.memberships.schedule import MEMBERSHIP_JOBS, clear_cron_jobs, setup_cron_jobs


class Command(BaseCommand):
    help = 'Register the daily membership jobs with the Celery Beat database scheduler'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Delete the existing membership jobs before registering them again.',
        )

    def handle(self, *args, **options):
        if options['reset']:
            deleted = clear_cron_jobs()
            self.stdout.write(f"Removed {deleted} scheduled job(s)")

        created = setup_cron_jobs()
        for job_name in MEMBERSHIP_JOBS:
            if job_name in created:
                self.stdout.write(self.style.SUCCESS(f"[OK] {job_name} scheduled daily"))
            else:
                self.stdout.write(f"[--] {job_name} already scheduled")
