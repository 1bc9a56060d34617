"""
Member Admin Tests
==================
Validates:
  1. Changing the expiration in the admin re-arms the expiring-soon notice
  2. Saving other fields keeps the notice marker
"""

from datetime import datetime, timedelta, timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase, override_settings
from django.urls import reverse

from apps.memberships.services import RenewalReminderService

from tests.factories import MemberFactory

User = get_user_model()

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


@override_settings(MEMBERSHIPS_RENEWAL_REMINDER_PERIOD='+1 week')
class MemberAdminRenewalTests(TestCase):

    def setUp(self):
        self.admin_user = User.objects.create_superuser(
            username='admin', email='admin@example.com', password='admin-pass',
        )
        self.client.force_login(self.admin_user)
        self.member = MemberFactory(
            expiration=NOW + timedelta(days=3),
            expiring_soon_email_sent_at=NOW - timedelta(days=1),
        )
        self.url = reverse('admin:memberships_member_change', args=[self.member.pk])

    def _post(self, expiration, recurring=False):
        data = {
            'user': self.member.user.pk,
            'subscription_level': self.member.subscription_level.pk,
            'status': self.member.status,
            'expiration_0': expiration.strftime('%Y-%m-%d'),
            'expiration_1': expiration.strftime('%H:%M:%S'),
            'notes-TOTAL_FORMS': '0',
            'notes-INITIAL_FORMS': '0',
            'notes-MIN_NUM_FORMS': '0',
            'notes-MAX_NUM_FORMS': '1000',
        }
        if recurring:
            data['recurring'] = 'on'
        return self.client.post(self.url, data)

    def test_new_expiration_rearms_notice(self):
        new_expiration = NOW + timedelta(days=5)

        response = self._post(new_expiration)

        self.assertEqual(response.status_code, 302)
        self.member.refresh_from_db()
        self.assertEqual(self.member.expiration, new_expiration)
        self.assertIsNone(self.member.expiring_soon_email_sent_at)

        stats = RenewalReminderService.run(now=NOW)
        self.assertEqual(stats['sent'], 1)
        self.assertEqual(len(mail.outbox), 1)

    def test_unchanged_expiration_keeps_marker(self):
        response = self._post(self.member.expiration, recurring=True)

        self.assertEqual(response.status_code, 302)
        self.member.refresh_from_db()
        self.assertTrue(self.member.recurring)
        self.assertEqual(self.member.expiring_soon_email_sent_at, NOW - timedelta(days=1))
