"""Renewal reminders for members whose subscription is about to lapse"""
import calendar
import logging
import re
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from apps.memberships.exceptions import InvalidReminderPeriod
from apps.memberships.models import Member
from apps.memberships.signals import expiring_notice_sent

from .email_service import MemberEmailService

logger = logging.getLogger(__name__)

PERIOD_NONE = 'none'
PERIOD_RE = re.compile(r'^\+?\s*(\d+)\s*(day|week|month|year)s?$', re.IGNORECASE)


def get_renewal_reminder_period():
    period = getattr(settings, 'MEMBERSHIPS_RENEWAL_REMINDER_PERIOD', PERIOD_NONE)
    return (period or PERIOD_NONE).strip()


def parse_reminder_period(period):
    """
    Split a lead time such as ``'+2 weeks'`` into ``(2, 'week')``.

    Returns ``None`` for ``'none'``.
    """
    if not period or period.strip().lower() == PERIOD_NONE:
        return None
    match = PERIOD_RE.match(period.strip())
    if not match:
        raise InvalidReminderPeriod(period)
    return int(match.group(1)), match.group(2).lower()


def _add_months(moment, months):
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def add_period(moment, period):
    """
    Shift ``moment`` forward by a parsed or raw reminder period.

    Month and year steps clamp to the last day of the target month, so
    Jan 31 + 1 month is Feb 29 (or 28) rather than rolling into March.
    """
    if isinstance(period, str):
        period = parse_reminder_period(period)
    if period is None:
        return moment

    amount, unit = period
    if unit == 'day':
        return moment + timedelta(days=amount)
    if unit == 'week':
        return moment + timedelta(weeks=amount)
    if unit == 'month':
        return _add_months(moment, amount)
    return _add_months(moment, amount * 12)


class RenewalReminderService:
    """Emails active, non-recurring members once before their membership expires."""

    MAX_MEMBERS = 9999
    NOTICE_NOTE = 'Expiration notice was emailed to the member.'

    @classmethod
    def expiring_queryset(cls, start, end):
        return (
            Member.objects.active()
            .non_recurring()
            .filter(expiration__gte=start, expiration__lte=end)
            .select_related('user', 'subscription_level')
            .order_by('expiration', 'pk')
        )

    @classmethod
    def was_notice_sent(cls, member):
        return member.expiring_soon_email_sent

    @classmethod
    def mark_notice_sent(cls, member):
        member.expiring_soon_email_sent_at = timezone.now()
        member.save(update_fields=['expiring_soon_email_sent_at', 'updated_at'])

    @classmethod
    def run(cls, now=None):
        stats = {'checked': 0, 'sent': 0, 'skipped': 0, 'no_email': 0}

        period = parse_reminder_period(get_renewal_reminder_period())
        if period is None:
            logger.debug('Renewal reminders disabled')
            return stats

        now = now or timezone.now()
        window_end = add_period(now, period)

        for member in cls.expiring_queryset(now, window_end)[:cls.MAX_MEMBERS]:
            stats['checked'] += 1
            if cls.was_notice_sent(member):
                stats['skipped'] += 1
                continue

            sent = MemberEmailService.send_expiring_notice(member)
            cls.mark_notice_sent(member)
            if not sent:
                stats['no_email'] += 1
                continue

            member.add_note(cls.NOTICE_NOTE)
            expiring_notice_sent.send(sender=Member, member=member)
            stats['sent'] += 1

        return stats
