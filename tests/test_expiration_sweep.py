"""
Expiration Sweep Tests
======================
Validates:
  1. Members more than two days past expiration are expired
  2. Members exactly two days past expiration are left alone
  3. Members that never expire, are not active, or expire later are skipped
  4. Expiring a member sends the expiration email and writes notes

Run:
    python manage.py test tests.test_expiration_sweep -v2
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings

from apps.memberships.models import Member
from apps.memberships.services import ExpiredMemberSweep

from tests.factories import MemberFactory

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


class ExpiredMemberSelectionTests(TestCase):

    def test_selects_active_members_expired_over_a_day_ago(self):
        overdue = MemberFactory(expiration=NOW - timedelta(days=5))
        MemberFactory(expiration=NOW - timedelta(hours=12))
        MemberFactory(expiration=NOW + timedelta(days=3))
        MemberFactory(expiration=None)
        MemberFactory(expiration=NOW - timedelta(days=5), status=Member.STATUS_CANCELLED)

        self.assertEqual(ExpiredMemberSweep.find_candidates(NOW), [overdue.pk])

    def test_candidates_ordered_by_username(self):
        zed = MemberFactory(user__username='zed', expiration=NOW - timedelta(days=4))
        amy = MemberFactory(user__username='amy', expiration=NOW - timedelta(days=4))

        self.assertEqual(ExpiredMemberSweep.find_candidates(NOW), [amy.pk, zed.pk])

    def test_candidates_capped(self):
        for _ in range(3):
            MemberFactory(expiration=NOW - timedelta(days=4))

        with patch.object(ExpiredMemberSweep, 'MAX_MEMBERS', 2):
            candidates = ExpiredMemberSweep.find_candidates(NOW)

        self.assertEqual(len(candidates), 2)


@override_settings(MEMBERSHIPS_EMAIL_ON_EXPIRATION=False)
class ExpiredMemberGraceTests(TestCase):

    def test_member_past_grace_is_expired(self):
        member = MemberFactory(expiration=NOW - timedelta(days=2, seconds=1))

        stats = ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_EXPIRED)
        self.assertEqual(stats, {'checked': 1, 'expired': 1})

    def test_member_exactly_two_days_past_is_not_expired(self):
        member = MemberFactory(expiration=NOW - timedelta(days=2))

        stats = ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_ACTIVE)
        self.assertEqual(stats, {'checked': 1, 'expired': 0})

    def test_member_inside_grace_window_is_not_expired(self):
        member = MemberFactory(expiration=NOW - timedelta(days=1, hours=12))

        ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_ACTIVE)

    def test_lifetime_member_is_never_expired(self):
        member = MemberFactory(expiration=None)

        stats = ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_ACTIVE)
        self.assertEqual(stats['checked'], 0)

    def test_second_run_does_nothing(self):
        MemberFactory(expiration=NOW - timedelta(days=10))

        ExpiredMemberSweep.run(now=NOW)
        stats = ExpiredMemberSweep.run(now=NOW)

        self.assertEqual(stats, {'checked': 0, 'expired': 0})

    def test_status_change_is_noted(self):
        member = MemberFactory(expiration=NOW - timedelta(days=10))

        ExpiredMemberSweep.run(now=NOW)

        notes = list(member.notes.values_list('note', flat=True))
        self.assertEqual(notes, ["Member's status changed from active to expired."])
        self.assertEqual(len(mail.outbox), 0)


@override_settings(MEMBERSHIPS_EMAIL_ON_EXPIRATION=True)
class ExpirationEmailTests(TestCase):

    def test_expired_member_is_emailed(self):
        member = MemberFactory(expiration=NOW - timedelta(days=10), subscription_level__name='Gold')

        ExpiredMemberSweep.run(now=NOW)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, [member.user.email])
        self.assertEqual(message.subject, 'Your Gold membership has expired')
        self.assertIn('expired on', message.body)
        self.assertIn('Expiration email was sent to the member.', member.notes.values_list('note', flat=True))

    def test_member_without_email_is_still_expired(self):
        member = MemberFactory(expiration=NOW - timedelta(days=10), user__email='')

        ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_EXPIRED)
        self.assertEqual(len(mail.outbox), 0)
