from datetime import timedelta
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from users.models import User

logger = logging.getLogger(__name__)


class UserCleanupService:
    """Removes owner accounts that never confirmed their email."""

    @staticmethod
    def get_unverified_cutoff(now=None):
        now = now or timezone.now()
        return now - timedelta(hours=settings.UNVERIFIED_USER_TTL_HOURS)

    @staticmethod
    def get_stale_unverified_users(now=None):
        cutoff = UserCleanupService.get_unverified_cutoff(now)
        return User.objects.filter(email_verified=False, created_at__lt=cutoff)

    @staticmethod
    @transaction.atomic
    def delete_unverified_users(now=None) -> int:
        """
        Deletes unverified users older than UNVERIFIED_USER_TTL_HOURS.

        Restaurants (and everything under them) owned by those users cascade.

        Returns:
            int: number of users deleted
        """
        stale_users = UserCleanupService.get_stale_unverified_users(now)
        # Count users only; delete() also reports cascaded rows.
        _, per_model = stale_users.delete()
        deleted = per_model.get(User._meta.label, 0)
        logger.info(f"Deleted {deleted} unverified users")
        return deleted
