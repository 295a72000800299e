"""
services/notification/webhooks.py
Fire-and-forget hand-off of domain events to the Celery webhook task.
"""

import logging

from pydantic import BaseModel

from config.settings import settings

logger = logging.getLogger(__name__)


def dispatch_event(event: str, record: BaseModel) -> None:
    """
    Queue a webhook for `record`. Never raises: a broken broker or a bad
    payload must not fail the request that produced the event.
    """
    if not settings.webhook_urls.get(event):
        return
    try:
        from tasks.notification_tasks import send_webhook

        send_webhook.delay(event, record.model_dump(mode="json", by_alias=True))
    except Exception as e:
        logger.warning(f"Failed to queue webhook '{event}': {e}")
