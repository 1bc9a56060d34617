"""
Membership Services Package
Re-exports the service classes used by tasks, signals and admin.
"""

from .status_service import MemberStatusService
from .email_service import MemberEmailService
from .expiration_service import ExpiredMemberSweep
from .reminder_service import (
    RenewalReminderService,
    add_period,
    get_renewal_reminder_period,
    parse_reminder_period,
)
from .count_service import MemberCountService

__all__ = [
    'MemberStatusService',
    'MemberEmailService',
    'ExpiredMemberSweep',
    'RenewalReminderService',
    'MemberCountService',
    'add_period',
    'get_renewal_reminder_period',
    'parse_reminder_period',
]
