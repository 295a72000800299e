"""
tasks/notification_tasks.py
Celery tasks for outbound webhook delivery (Zapier catch hooks).

Every event is posted as {"event", "data", "timestamp"} to the URL configured
for that event. An unset URL means the integration is off and the event is
dropped. Delivery failures are logged, never raised back to the caller.

Usage from a route:
    from tasks.notification_tasks import send_webhook
    send_webhook.delay("new_booking", booking.model_dump(mode="json", by_alias=True))
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from pybreaker import CircuitBreaker, CircuitBreakerError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config.settings import settings
from tasks.celery_app import celery_app

logger = logging.getLogger(__name__)

WEBHOOK_EVENTS = (
    "new_booking",
    "booking_status_update",
    "new_user_registration",
    "professional_assignment",
)

# Shared across deliveries in this worker process
webhook_breaker = CircuitBreaker(fail_max=5, reset_timeout=60, name="zapier_webhooks")


# ── Core Delivery Functions ────────────────────────────────────────────────────

def build_payload(event: str, data: dict) -> dict:
    return {
        "event": event,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.2, max=2),
    retry=retry_if_exception_type(httpx.HTTPError),
    reraise=True,
)
def _post_json(url: str, payload: dict) -> int:
    response = httpx.post(url, json=payload, timeout=settings.WEBHOOK_TIMEOUT_SECONDS)
    response.raise_for_status()
    return response.status_code


def deliver_webhook(event: str, data: dict, url: Optional[str] = None) -> bool:
    """
    POST one event. Returns True on a 2xx response.
    Retries transient HTTP errors, then trips the breaker after repeated failures.
    """
    if event not in WEBHOOK_EVENTS:
        logger.warning(f"Unknown webhook event '{event}', dropping")
        return False

    url = url or settings.webhook_urls.get(event)
    if not url:
        logger.debug(f"No webhook configured for '{event}', skipping")
        return False

    try:
        status_code = webhook_breaker.call(_post_json, url, build_payload(event, data))
    except CircuitBreakerError:
        logger.warning(f"Webhook circuit open, dropping '{event}'")
        return False
    except httpx.HTTPError as e:
        logger.warning(f"Webhook '{event}' delivery failed: {e}")
        return False

    logger.info(f"Webhook '{event}' delivered ({status_code})")
    return True


# ── Celery Tasks ───────────────────────────────────────────────────────────────

@celery_app.task(name="tasks.notification_tasks.send_webhook", ignore_result=True)
def send_webhook(event: str, data: dict) -> bool:
    """Deliver a single webhook event. Idempotent on the receiving Zap by payload id."""
    return deliver_webhook(event, data)
