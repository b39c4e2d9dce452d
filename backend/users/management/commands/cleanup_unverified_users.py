from django.core.management.base import BaseCommand

from users.services import UserCleanupService


class Command(BaseCommand):
    help = "Delete owner accounts that stayed unverified past the allowed window"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be cleaned up without making changes",
        )

    def handle(self, *args, **options):
        if options["dry_run"]:
            count = UserCleanupService.get_stale_unverified_users().count()
            self.stdout.write(
                self.style.WARNING(f"DRY RUN: Would delete {count} unverified users")
            )
            return

        deleted = UserCleanupService.delete_unverified_users()
        self.stdout.write(
            self.style.SUCCESS(f"Successfully deleted {deleted} unverified users")
        )
