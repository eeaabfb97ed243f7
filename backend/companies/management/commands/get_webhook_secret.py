from django.core.management.base import BaseCommand, CommandError

from companies.models import Company


class Command(BaseCommand):
    help = "Print the webhook credentials of a company, looked up by business email."

    def add_arguments(self, parser):
        parser.add_argument("business_email", help="Business email the company registered with")

    def handle(self, *args, **opts):
        email = opts["business_email"]
        company = Company.objects.filter(business_email__iexact=email).first()
        if not company:
            raise CommandError(f"Company not found: {email}")

        self.stdout.write("\nCompany information:\n")
        self.stdout.write(f"Company: {company.company_name}\n")
        self.stdout.write(f"KYC Status: {company.kyc_status}\n")
        self.stdout.write(f"Webhook Active: {company.is_webhook_active}\n")
        self.stdout.write(f"\nWebhook Secret:\n{company.webhook_secret or 'Not generated yet'}\n")
