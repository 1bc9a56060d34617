"""Member status transitions"""
import logging

from apps.memberships.exceptions import InvalidMemberStatus
from apps.memberships.models import Member
from apps.memberships.signals import member_status_changed

logger = logging.getLogger(__name__)


class MemberStatusService:
    """Writes member statuses and keeps level counters and notes in step."""

    STATUS_NOTE = "Member's status changed from {old} to {new}."

    @classmethod
    def set_status(cls, member, new_status):
        """
        Move ``member`` to ``new_status``.

        Returns ``False`` when the member already has that status, ``True``
        once the new status has been written.
        """
        if new_status not in Member.STATUSES:
            raise InvalidMemberStatus(new_status)

        old_status = member.status
        if old_status == new_status:
            return False

        member.status = new_status
        member.save(update_fields=['status', 'updated_at'])

        level = member.subscription_level
        if level is not None:
            if old_status:
                level.decrement_member_count(old_status)
            level.increment_member_count(new_status)

        member.add_note(cls.STATUS_NOTE.format(old=old_status, new=new_status))
        logger.info('Member %s status changed from %s to %s', member.pk, old_status, new_status)

        member_status_changed.send(
            sender=Member,
            member=member,
            old_status=old_status,
            new_status=new_status,
        )
        return True
