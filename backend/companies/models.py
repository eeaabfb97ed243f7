import secrets

from django.db import models

from common.models import BaseModel


class Company(BaseModel):
    """
    An e-commerce company sending order webhooks.

    Registration, KYC review and login live outside this service; here we only
    read the webhook credentials they produce (secret, activation, KYC status).
    """
    class KycStatus(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"

    company_name = models.CharField(max_length=200)
    business_email = models.EmailField(unique=True)

    webhook_secret = models.CharField(max_length=128, unique=True, blank=True, null=True)
    is_webhook_active = models.BooleanField(default=False)
    kyc_status = models.CharField(max_length=16, choices=KycStatus.choices, default=KycStatus.PENDING)

    class Meta:
        ordering = ["company_name"]
        verbose_name_plural = "companies"

    def __str__(self):
        return self.company_name

    @property
    def accepts_webhooks(self) -> bool:
        return self.is_webhook_active and self.kyc_status == self.KycStatus.APPROVED

    def generate_webhook_secret(self, activate: bool = True) -> str:
        """Issue a fresh 256-bit hex secret; the previous one stops working immediately."""
        self.webhook_secret = secrets.token_hex(32)
        if activate:
            self.is_webhook_active = True
        self.save(update_fields=["webhook_secret", "is_webhook_active", "updated_at"])
        return self.webhook_secret
