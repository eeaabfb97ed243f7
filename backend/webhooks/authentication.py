"""
X-Webhook-Secret authentication for company webhooks.

`authenticate_secret` does the actual check and raises a specific
WebhookAuthError subclass; the DRF authentication class collapses all of them
into one generic 401 so callers can't tell which gate they failed.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from companies.models import Company

logger = logging.getLogger(__name__)

WEBHOOK_SECRET_HEADER = "X-Webhook-Secret"
GENERIC_FAILURE = "Invalid webhook credentials"


class WebhookAuthError(Exception):
    kind = "unknown"


class MissingCredential(WebhookAuthError):
    kind = "missing_credential"


class InvalidCredential(WebhookAuthError):
    kind = "invalid_credential"


class InactiveWebhook(WebhookAuthError):
    kind = "inactive_webhook"


class KycNotApproved(WebhookAuthError):
    kind = "kyc_not_approved"


def _single_token(value: Union[None, str, Sequence[str]]) -> str:
    if value is None:
        raise MissingCredential("Missing X-Webhook-Secret header")
    if not isinstance(value, str):
        if len(value) != 1:
            raise MissingCredential("X-Webhook-Secret must be sent exactly once")
        value = value[0]
    # WSGI folds repeated headers into one comma-separated value
    if "," in value:
        raise MissingCredential("X-Webhook-Secret must be sent exactly once")
    value = value.strip()
    if not value:
        raise MissingCredential("Missing X-Webhook-Secret header")
    return value


def authenticate_secret(value: Union[None, str, Sequence[str]]):
    """Return the id of the company owning `value`, or raise WebhookAuthError."""
    secret = _single_token(value)
    company = (
        Company.objects.filter(webhook_secret=secret)
        .only("id", "is_webhook_active", "kyc_status")
        .first()
    )
    if company is None:
        raise InvalidCredential("Invalid webhook secret")
    if not company.is_webhook_active:
        raise InactiveWebhook("Webhook is not active")
    if company.kyc_status != Company.KycStatus.APPROVED:
        raise KycNotApproved("Company KYC not approved")
    return company.id


class WebhookCompany:
    """Stands in for request.user on webhook requests; request.auth holds the same id."""
    is_authenticated = True
    is_anonymous = False

    def __init__(self, company_id):
        self.company_id = company_id
        self.pk = company_id

    def __str__(self):
        return f"company:{self.company_id}"


class WebhookSecretAuthentication(BaseAuthentication):
    def authenticate(self, request) -> Optional[tuple]:
        value = request.headers.get(WEBHOOK_SECRET_HEADER)
        try:
            company_id = authenticate_secret(value)
        except WebhookAuthError as e:
            logger.warning(
                "webhook auth rejected kind=%s path=%s request_id=%s",
                e.kind, request.path, getattr(request, "request_id", "-"),
            )
            raise exceptions.AuthenticationFailed(GENERIC_FAILURE)
        return WebhookCompany(company_id), company_id

    def authenticate_header(self, request) -> str:
        # non-empty so DRF answers 401 rather than 403
        return WEBHOOK_SECRET_HEADER
