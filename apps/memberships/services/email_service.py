"""Renders and sends membership emails"""
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


class MemberEmailService:
    """Membership notices sent through the Django mail backend."""

    EVENT_EXPIRING = 'expiring_soon'
    EVENT_EXPIRED = 'expired'

    TEMPLATE_MAP = {
        EVENT_EXPIRING: 'memberships/emails/expiring_soon.html',
        EVENT_EXPIRED: 'memberships/emails/expired.html',
    }
    SUBJECT_SETTINGS = {
        EVENT_EXPIRING: 'MEMBERSHIPS_EXPIRING_SUBJECT',
        EVENT_EXPIRED: 'MEMBERSHIPS_EXPIRED_SUBJECT',
    }
    DEFAULT_SUBJECTS = {
        EVENT_EXPIRING: 'Your {level} membership is about to expire',
        EVENT_EXPIRED: 'Your {level} membership has expired',
    }

    @classmethod
    def send_expiring_notice(cls, member):
        return cls.send_event_email(member, cls.EVENT_EXPIRING)

    @classmethod
    def send_expired_notice(cls, member):
        return cls.send_event_email(member, cls.EVENT_EXPIRED)

    @classmethod
    def send_event_email(cls, member, event_key):
        if event_key not in cls.TEMPLATE_MAP:
            logger.warning('Unknown membership email event: %s', event_key)
            return False

        recipient = getattr(member.user, 'email', None)
        if not recipient:
            logger.warning('Member %s has no email address; %s email not sent', member.pk, event_key)
            return False

        context = cls._build_context(member)
        subject = cls._build_subject(event_key, context)
        html_body = render_to_string(cls.TEMPLATE_MAP[event_key], context)
        text_body = strip_tags(html_body)

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient],
        )
        email.attach_alternative(html_body, 'text/html')
        email.send()
        logger.info('Sent %s email to member %s', event_key, member.pk)
        return True

    @classmethod
    def _build_subject(cls, event_key, context):
        template = getattr(settings, cls.SUBJECT_SETTINGS[event_key], None) or cls.DEFAULT_SUBJECTS[event_key]
        return template.format(
            name=context['member_name'],
            level=context['level_name'],
            expiration=context['expiration_date'],
        )

    @staticmethod
    def _build_context(member):
        user = member.user
        level = member.subscription_level
        expiration = member.get_expiration_timestamp()
        if expiration:
            expiration_str = timezone.localtime(expiration).strftime('%d %b %Y')
        else:
            expiration_str = 'never'
        return {
            'member_name': user.get_full_name() or user.get_username(),
            'username': user.get_username(),
            'level_name': level.name if level else 'membership',
            'expiration_date': expiration_str,
            'renewal_link': getattr(settings, 'MEMBERSHIPS_RENEWAL_URL', ''),
            'site_name': getattr(settings, 'MEMBERSHIPS_SITE_NAME', 'Members'),
            'year': timezone.now().year,
        }
