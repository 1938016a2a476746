import logging
from typing import Any, Dict, Iterable, Optional

from teamtasks.core.metrics import notifications_total
from teamtasks.services.notifications.base import NotificationProvider
from teamtasks.services.notifications.webhook_provider import WebhookNotificationProvider

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Best-effort notification dispatch.

    send() never raises: the triggering write is already committed, so a
    failed notification is logged and dropped.
    """

    def __init__(self, provider: Optional[NotificationProvider] = None):
        self.provider = provider or WebhookNotificationProvider()

    async def send(
        self,
        subject: str,
        message: str,
        recipient_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        try:
            delivered = await self.provider.send(recipient_id, subject, message, metadata or {})
        except Exception as e:
            notifications_total.labels(status="error").inc()
            logger.warning(
                f"Failed to send notification '{subject}' to {recipient_id}, continuing: {e}"
            )
            return

        notifications_total.labels(status="sent" if delivered else "skipped").inc()

    async def send_many(
        self,
        subject: str,
        message: str,
        recipient_ids: Iterable[str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Send the same notification to each recipient, one after another."""
        for recipient_id in recipient_ids:
            await self.send(subject, message, recipient_id, metadata)
