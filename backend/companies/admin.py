from django.contrib import admin, messages

from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("company_name", "business_email", "kyc_status", "is_webhook_active", "created_at")
    list_filter = ("kyc_status", "is_webhook_active")
    search_fields = ("company_name", "business_email")
    readonly_fields = ("webhook_secret", "created_at", "updated_at")
    actions = ["generate_webhook_secret"]

    @admin.action(description="Generate a new webhook secret")
    def generate_webhook_secret(self, request, queryset):
        issued = 0
        for company in queryset:
            if company.kyc_status != Company.KycStatus.APPROVED:
                self.message_user(
                    request, f"{company}: KYC is not approved, skipped.", level=messages.WARNING
                )
                continue
            company.generate_webhook_secret()
            issued += 1
        if issued:
            self.message_user(request, f"Issued {issued} new webhook secret(s).")
