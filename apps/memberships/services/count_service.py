"""Recomputes the per-level member counters"""
import logging

from apps.memberships.models import Member, SubscriptionLevel

logger = logging.getLogger(__name__)


class MemberCountService:

    @staticmethod
    def count_members(level, status):
        return Member.objects.at_level(level, status).count()

    @classmethod
    def reconcile(cls):
        """Overwrite every level's counter for every status with a fresh count."""
        counts = {}
        levels = list(SubscriptionLevel.objects.all())
        if not levels:
            return counts

        for level in levels:
            for status in Member.STATUSES:
                count = cls.count_members(level, status)
                level.update_meta(level.member_count_key(status), count)
                counts[level.member_count_key(status)] = count

        return counts
