from abc import ABC, abstractmethod
from typing import Any, Dict


class NotificationProvider(ABC):
    @abstractmethod
    async def send(
        self,
        recipient_id: str,
        subject: str,
        message: str,
        metadata: Dict[str, Any],
    ) -> bool:
        """
        Send a notification.
        :param recipient_id: Normalized user id of the recipient
        :param subject: The subject of the notification
        :param message: The body of the notification
        :param metadata: Structured context (team, task, action)
        :return: True if successful, False otherwise
        """
        pass
