"""
Membership Models

Members are host user accounts with subscription metadata attached.
Subscription levels keep their aggregate member counters in ``LevelMeta``.
"""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class SubscriptionLevel(TimeStampedModel):
    """A named membership tier"""

    UNIT_DAY = 'day'
    UNIT_MONTH = 'month'
    UNIT_YEAR = 'year'

    UNIT_CHOICES = [
        (UNIT_DAY, 'Day(s)'),
        (UNIT_MONTH, 'Month(s)'),
        (UNIT_YEAR, 'Year(s)'),
    ]

    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    duration = models.PositiveSmallIntegerField(
        default=0,
        help_text="0 means the level never expires",
    )
    duration_unit = models.CharField(max_length=10, choices=UNIT_CHOICES, default=UNIT_MONTH)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    # ------------------------------------------------------------------
    # Meta storage
    # ------------------------------------------------------------------
    def get_meta(self, key, default=None):
        value = (
            LevelMeta.objects.filter(level=self, meta_key=key)
            .values_list('meta_value', flat=True)
            .first()
        )
        return default if value is None else value

    def update_meta(self, key, value):
        LevelMeta.objects.update_or_create(
            level=self,
            meta_key=key,
            defaults={'meta_value': str(value)},
        )

    # ------------------------------------------------------------------
    # Member counters
    # ------------------------------------------------------------------
    def member_count_key(self, status):
        return f'{self.pk}_{status}_member_count'

    def get_member_count(self, status):
        return int(self.get_meta(self.member_count_key(status), 0))

    def increment_member_count(self, status):
        count = self.get_member_count(status) + 1
        self.update_meta(self.member_count_key(status), count)
        return count

    def decrement_member_count(self, status):
        count = max(self.get_member_count(status) - 1, 0)
        self.update_meta(self.member_count_key(status), count)
        return count


class LevelMeta(models.Model):
    """Key/value metadata attached to a subscription level"""

    level = models.ForeignKey(SubscriptionLevel, on_delete=models.CASCADE, related_name='meta')
    meta_key = models.CharField(max_length=255)
    meta_value = models.TextField(blank=True)

    class Meta:
        verbose_name = 'Level Meta'
        verbose_name_plural = 'Level Meta'
        constraints = [
            models.UniqueConstraint(
                fields=['level', 'meta_key'],
                name='uq_level_meta_key',
            )
        ]

    def __str__(self):
        return f'{self.level_id}: {self.meta_key}={self.meta_value}'


class MemberQuerySet(models.QuerySet):

    def active(self):
        return self.filter(status=Member.STATUS_ACTIVE)

    def with_expiration(self):
        return self.filter(expiration__isnull=False)

    def non_recurring(self):
        return self.filter(recurring=False)

    def at_level(self, level, status=None):
        qs = self.filter(subscription_level=level)
        if status:
            qs = qs.filter(status=status)
        return qs


class Member(TimeStampedModel):
    """Subscription metadata for a host user account"""

    STATUS_ACTIVE = 'active'
    STATUS_PENDING = 'pending'
    STATUS_CANCELLED = 'cancelled'
    STATUS_EXPIRED = 'expired'
    STATUS_FREE = 'free'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_PENDING, 'Pending'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_EXPIRED, 'Expired'),
        (STATUS_FREE, 'Free'),
    ]
    STATUSES = [value for value, _label in STATUS_CHOICES]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='membership',
    )
    subscription_level = models.ForeignKey(
        SubscriptionLevel,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members',
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )
    expiration = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Leave empty for a membership that never expires",
    )
    recurring = models.BooleanField(default=False)
    expiring_soon_email_sent_at = models.DateTimeField(null=True, blank=True)

    objects = MemberQuerySet.as_manager()

    class Meta:
        ordering = ['user__username']
        indexes = [
            models.Index(fields=['status', 'expiration'], name='member_status_expiration_idx'),
        ]

    def __str__(self):
        return f'{self.user} ({self.status})'

    def get_expiration_timestamp(self):
        """Expiration datetime, or ``None`` when the membership never expires."""
        return self.expiration

    @property
    def never_expires(self):
        return self.expiration is None

    @property
    def expiring_soon_email_sent(self):
        return self.expiring_soon_email_sent_at is not None

    def set_expiration(self, expiration):
        """Store a new expiration and re-arm the expiring-soon notice."""
        self.expiration = expiration
        self.expiring_soon_email_sent_at = None
        self.save(update_fields=['expiration', 'expiring_soon_email_sent_at', 'updated_at'])

    def add_note(self, note):
        return MemberNote.objects.create(member=self, note=note)


class MemberNote(models.Model):
    """Append-only audit trail for a member"""

    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name='notes')
    note = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.note
