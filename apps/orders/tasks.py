from celery import shared_task
import logging

from .models import ActivityLog

logger = logging.getLogger(__name__)


@shared_task
def record_purchase_activity(city, item_name):
    """
    Appends an anonymised entry to the public purchase feed.
    Runs after the order commits; a failure here never touches the order.
    """
    message = f'Someone in {city or "your area"} just purchased a "{item_name or "an item"}".'
    try:
        ActivityLog.objects.create(message=message)
    except Exception as exc:
        logger.error(f"Failed to record purchase activity: {exc}", exc_info=True)
        return None
    return message
