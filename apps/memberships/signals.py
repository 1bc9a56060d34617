"""
Membership signals.

``member_status_changed`` fires after a member's status has been written.
Receivers below send the expiration email and register the periodic jobs
after migrations.
"""
import logging

from django.conf import settings
from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

# kwargs: member, old_status, new_status
member_status_changed = Signal()

# kwargs: member
expiring_notice_sent = Signal()


@receiver(member_status_changed)
def email_on_expiration(sender, member, old_status, new_status, **kwargs):
    """Tell the member their membership has expired."""
    from apps.memberships.models import Member
    from apps.memberships.services import MemberEmailService

    if new_status != Member.STATUS_EXPIRED:
        return
    if not getattr(settings, 'MEMBERSHIPS_EMAIL_ON_EXPIRATION', True):
        return

    if MemberEmailService.send_expired_notice(member):
        member.add_note('Expiration email was sent to the member.')


def register_jobs_after_migrate(sender, **kwargs):
    """Make sure the periodic membership jobs exist once the schema is in place."""
    if not getattr(settings, 'MEMBERSHIPS_REGISTER_JOBS_ON_MIGRATE', True):
        return

    from apps.memberships.schedule import setup_cron_jobs

    created = setup_cron_jobs()
    if created:
        logger.info('Registered membership jobs: %s', ', '.join(created))
