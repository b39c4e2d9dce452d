from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def delete_unverified_users():
    """
    Hourly sweep (see CELERY_BEAT_SCHEDULE).

    Fire-and-forget: failures are logged and reported in the result, never raised.
    """
    from users.services import UserCleanupService

    try:
        deleted = UserCleanupService.delete_unverified_users()
        return {"status": "completed", "deleted": deleted}
    except Exception as exc:
        logger.error(f"Failed to delete unverified users: {exc}", exc_info=True)
        return {"status": "failed", "error": str(exc)}
