import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from teamtasks.core.config import settings
from teamtasks.services.notifications.base import NotificationProvider

logger = logging.getLogger(__name__)


class WebhookNotificationProvider(NotificationProvider):
    """Publishes notifications as JSON messages to the fan-out endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        topic: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = settings.NOTIFICATION_WEBHOOK_URL if url is None else url
        self.topic = topic or settings.NOTIFICATION_TOPIC
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT_SECONDS
        self._transport = transport

    def build_payload(
        self, recipient_id: str, subject: str, message: str, metadata: Dict[str, Any]
    ) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "subject": subject,
            "recipientId": recipient_id,
            "message": message,
            "metadata": metadata,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def send(
        self,
        recipient_id: str,
        subject: str,
        message: str,
        metadata: Dict[str, Any],
    ) -> bool:
        if not self.url:
            logger.warning("NOTIFICATION_WEBHOOK_URL not configured. Skipping notification.")
            return False

        payload = self.build_payload(recipient_id, subject, message, metadata)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, json=payload)

        if response.status_code in (200, 201, 202, 204):
            logger.info(f"Notification '{subject}' published for {recipient_id}")
            return True

        logger.error(
            f"Failed to publish notification. Status: {response.status_code}, Body: {response.text}"
        )
        return False
