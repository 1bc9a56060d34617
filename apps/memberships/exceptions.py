"""
Membership exceptions

Job failures (database, mail) are not wrapped; they propagate to the
scheduler. These cover misuse of the membership API itself.
"""


class MembershipError(Exception):
    """Base exception for membership errors"""

    def __init__(self, message, code=None):
        self.message = message
        self.code = code or 'membership_error'
        super().__init__(message)


class InvalidMemberStatus(MembershipError):
    """Status value outside the known member statuses"""

    def __init__(self, status):
        self.status = status
        super().__init__(f"Invalid member status: {status!r}", code='invalid_status')


class InvalidReminderPeriod(MembershipError):
    """Renewal reminder period that cannot be parsed"""

    def __init__(self, period):
        self.period = period
        super().__init__(f"Invalid renewal reminder period: {period!r}", code='invalid_period')


class UnknownMembershipJob(MembershipError):
    """Job identifier that is not registered"""

    def __init__(self, job_name):
        self.job_name = job_name
        super().__init__(f"Unknown membership job: {job_name!r}", code='unknown_job')
