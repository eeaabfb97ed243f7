import json

from django.core.management.base import BaseCommand

from notifications.dispatcher import build_dispatcher


class Command(BaseCommand):
    help = "Resend FAILED customer notifications created within the retry window (default 24h)."

    def add_arguments(self, parser):
        parser.add_argument("--json", action="store_true", help="Output as JSON (default is pretty text)")

    def handle(self, *args, **opts):
        if not opts.get("json"):
            self.stdout.write("Starting notification retry process...\n")

        summary = build_dispatcher().retry_failed()

        if opts.get("json"):
            self.stdout.write(json.dumps(
                {"total": summary.total, "success": summary.success, "failed": summary.failed}
            ))
            return
        self.stdout.write(
            f"Successfully retried {summary.success}/{summary.total} notifications "
            f"({summary.failed} still failing)\n"
        )
