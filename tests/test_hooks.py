"""
Filter Hook Tests
=================
Validates that external code can rewrite the expiration sweep's selection
query and filter its result set, both by connecting callables directly and
through dotted paths in settings.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

from django.test import SimpleTestCase, TestCase, override_settings

from apps.memberships import hooks
from apps.memberships.models import Member
from apps.memberships.services import ExpiredMemberSweep

from tests.factories import MemberFactory

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=dt_timezone.utc)


def exclude_gold(queryset, **kwargs):
    return queryset.exclude(subscription_level__name='Gold')


def drop_all(member_ids, **kwargs):
    return []


class FilterHookTests(SimpleTestCase):

    def test_apply_threads_value_through_filters(self):
        hook = hooks.FilterHook('test')
        hook.connect(lambda value, **kwargs: value + 1)
        hook.connect(lambda value, **kwargs: value * kwargs['factor'])

        self.assertEqual(hook.apply(2, factor=10), 30)

    def test_apply_without_filters_returns_value(self):
        hook = hooks.FilterHook('test')

        self.assertFalse(hook.has_filters())
        self.assertEqual(hook.apply([1, 2]), [1, 2])

    def test_connect_is_idempotent(self):
        hook = hooks.FilterHook('test')
        hook.connect(drop_all)
        hook.connect(drop_all)

        self.assertEqual(len(hook._filters), 1)

    def test_disconnect(self):
        hook = hooks.FilterHook('test')
        hook.connect(drop_all)

        self.assertTrue(hook.disconnect(drop_all))
        self.assertFalse(hook.disconnect(drop_all))
        self.assertEqual(hook.apply([1]), [1])

    def test_connect_works_as_decorator(self):
        hook = hooks.FilterHook('test')

        @hook.connect
        def double(value, **kwargs):
            return value * 2

        self.assertEqual(double(2), 4)
        self.assertEqual(hook.apply(3), 6)


@override_settings(MEMBERSHIPS_EMAIL_ON_EXPIRATION=False)
class ExpiredSweepHookTests(TestCase):

    def tearDown(self):
        hooks.expired_members_query.disconnect(exclude_gold)
        hooks.expired_members.disconnect(drop_all)

    def test_query_filter_rewrites_selection(self):
        gold = MemberFactory(expiration=NOW - timedelta(days=5), subscription_level__name='Gold')
        basic = MemberFactory(expiration=NOW - timedelta(days=5), subscription_level__name='Basic')
        hooks.expired_members_query.connect(exclude_gold)

        ExpiredMemberSweep.run(now=NOW)

        gold.refresh_from_db()
        basic.refresh_from_db()
        self.assertEqual(gold.status, Member.STATUS_ACTIVE)
        self.assertEqual(basic.status, Member.STATUS_EXPIRED)

    def test_members_filter_receives_cutoff(self):
        member = MemberFactory(expiration=NOW - timedelta(days=5))
        seen = {}

        def record(member_ids, **kwargs):
            seen['ids'] = list(member_ids)
            seen['cutoff'] = kwargs['cutoff']
            return member_ids

        hooks.expired_members.connect(record)
        try:
            ExpiredMemberSweep.run(now=NOW)
        finally:
            hooks.expired_members.disconnect(record)

        self.assertEqual(seen, {'ids': [member.pk], 'cutoff': NOW - timedelta(days=1)})

    def test_members_filter_can_drop_everyone(self):
        member = MemberFactory(expiration=NOW - timedelta(days=5))
        hooks.expired_members.connect(drop_all)

        stats = ExpiredMemberSweep.run(now=NOW)

        member.refresh_from_db()
        self.assertEqual(member.status, Member.STATUS_ACTIVE)
        self.assertEqual(stats, {'checked': 0, 'expired': 0})

    @override_settings(
        MEMBERSHIPS_EXPIRED_MEMBERS_QUERY_FILTERS=['tests.test_hooks.exclude_gold'],
        MEMBERSHIPS_EXPIRED_MEMBERS_FILTERS=['tests.test_hooks.drop_all'],
    )
    def test_settings_filters_are_loaded(self):
        hooks.load_settings_filters()

        self.assertIn(exclude_gold, hooks.expired_members_query._filters)
        self.assertIn(drop_all, hooks.expired_members._filters)
