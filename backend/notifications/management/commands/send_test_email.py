from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.rendering import TemplateEmailRenderer
from notifications.transport import DjangoEmailTransport


class Command(BaseCommand):
    help = "Send a test email through the configured email backend."

    def add_arguments(self, parser):
        parser.add_argument("address", help="Recipient address")

    def handle(self, *args, **opts):
        to = opts["address"]
        self.stdout.write(f"Sending test email to: {to}\n")

        html = TemplateEmailRenderer().render_test_email(sent_at=timezone.now())
        result = DjangoEmailTransport().send(to, "Order Fellow - Email Test", html)

        if not result.success:
            raise CommandError(f"Failed to send test email: {result.error}")
        self.stdout.write(f"Test email sent successfully! Message ID: {result.message_id}\n")
