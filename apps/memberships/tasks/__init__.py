"""Membership tasks, re-exported so Celery auto-discovery finds them."""
from .expired_users_task import check_for_expired_users
from .expiring_soon_task import check_for_soon_to_expire_users
from .member_counts_task import check_member_counts

__all__ = [
    'check_for_expired_users',
    'check_for_soon_to_expire_users',
    'check_member_counts',
]
