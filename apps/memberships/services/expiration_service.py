"""Daily sweep that expires overdue memberships"""
import logging
from datetime import timedelta

from django.utils import timezone

from apps.memberships import hooks
from apps.memberships.models import Member

from .status_service import MemberStatusService

logger = logging.getLogger(__name__)


class ExpiredMemberSweep:
    """
    Marks active members whose expiration has passed as expired.

    Candidates are members that expired more than a day ago. Each one is
    re-checked against a two day grace window before its status changes, so
    members are only expired once the expiration is safely in the past.
    """

    SELECTION_WINDOW = timedelta(days=1)
    GRACE_PERIOD = timedelta(days=2)
    MAX_MEMBERS = 9999

    @classmethod
    def selection_queryset(cls, cutoff):
        return (
            Member.objects.active()
            .with_expiration()
            .filter(expiration__lt=cutoff)
            .order_by('user__username')
        )

    @classmethod
    def find_candidates(cls, now=None):
        """Member ids eligible for the sweep, after filter hooks ran."""
        now = now or timezone.now()
        cutoff = now - cls.SELECTION_WINDOW

        queryset = hooks.expired_members_query.apply(cls.selection_queryset(cutoff), cutoff=cutoff)
        member_ids = list(queryset.values_list('pk', flat=True)[:cls.MAX_MEMBERS])
        return hooks.expired_members.apply(member_ids, cutoff=cutoff)

    @classmethod
    def is_past_grace(cls, member, now):
        expiration = member.get_expiration_timestamp()
        return bool(expiration) and now - cls.GRACE_PERIOD > expiration

    @classmethod
    def run(cls, now=None):
        now = now or timezone.now()
        stats = {'checked': 0, 'expired': 0}

        for member_id in cls.find_candidates(now) or []:
            member = (
                Member.objects.select_related('user', 'subscription_level')
                .filter(pk=member_id)
                .first()
            )
            if member is None:
                logger.warning('Member %s selected for expiry no longer exists', member_id)
                continue

            stats['checked'] += 1
            if not cls.is_past_grace(member, now):
                continue

            if MemberStatusService.set_status(member, Member.STATUS_EXPIRED):
                stats['expired'] += 1

        return stats
