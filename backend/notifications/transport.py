from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.utils import make_msgid
from typing import Optional, Protocol

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class EmailTransport(Protocol):
    def send(self, to: str, subject: str, html: str) -> SendResult: ...


class DjangoEmailTransport:
    """
    Sends through Django's configured EMAIL_BACKEND. Never raises for delivery
    problems; they come back as SendResult(success=False, error=...).
    Timeouts are the backend's business (EMAIL_TIMEOUT for SMTP).
    """

    def __init__(self, from_email: Optional[str] = None, connection=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.connection = connection

    def send(self, to: str, subject: str, html: str) -> SendResult:
        message_id = make_msgid(domain=settings.EMAIL_MESSAGE_ID_DOMAIN)
        email = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(html),
            from_email=self.from_email,
            to=[to],
            headers={"Message-ID": message_id},
            connection=self.connection or get_connection(fail_silently=False),
        )
        email.attach_alternative(html, "text/html")
        try:
            email.send(fail_silently=False)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.warning("email to %s failed: %s", to, e)
            return SendResult(success=False, error=str(e) or e.__class__.__name__)
        logger.info("email sent to %s message_id=%s", to, message_id)
        return SendResult(success=True, message_id=message_id)
