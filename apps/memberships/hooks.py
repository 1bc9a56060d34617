"""
Filter hooks for membership jobs.

Django signals broadcast events but discard what receivers return. A
``FilterHook`` threads a value through every connected callable instead, so
external code can rewrite what a job works on::

    from apps.memberships.hooks import expired_members

    @expired_members.connect
    def skip_staff(member_ids, **kwargs):
        return [pk for pk in member_ids if pk not in STAFF_IDS]
"""
import logging

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class FilterHook:
    """Ordered chain of callables that each receive and return a value."""

    def __init__(self, name):
        self.name = name
        self._filters = []

    def __repr__(self):
        return f'<FilterHook {self.name} ({len(self._filters)} filters)>'

    def connect(self, func):
        if func not in self._filters:
            self._filters.append(func)
        return func

    def disconnect(self, func):
        try:
            self._filters.remove(func)
        except ValueError:
            return False
        return True

    def has_filters(self):
        return bool(self._filters)

    def apply(self, value, **kwargs):
        for func in list(self._filters):
            value = func(value, **kwargs)
        return value


# Receives the selection queryset of the expiration sweep, returns a queryset.
expired_members_query = FilterHook('expired_members_query')

# Receives the list of member ids selected for expiry, returns a list of ids.
expired_members = FilterHook('expired_members')


SETTINGS_HOOKS = {
    'MEMBERSHIPS_EXPIRED_MEMBERS_QUERY_FILTERS': expired_members_query,
    'MEMBERSHIPS_EXPIRED_MEMBERS_FILTERS': expired_members,
}


def load_settings_filters():
    """Connect filters configured as dotted paths in settings."""
    for setting_name, hook in SETTINGS_HOOKS.items():
        for path in getattr(settings, setting_name, None) or []:
            hook.connect(import_string(path))
            logger.debug('Connected %s to %s', path, hook.name)
