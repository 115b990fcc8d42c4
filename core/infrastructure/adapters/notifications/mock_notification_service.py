"""
Mock Notification Service Implementation.

This simulates customer emails and operator alerts for testing and for
deployments with mail disabled.
"""
from typing import Any, Dict, List
import logging

from core.application.interfaces import (
    INotificationService,
    IOperatorAlertService,
    NotificationTemplate,
)


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService, IOperatorAlertService):
    """
    Mock implementation of notification service.

    Logs notifications instead of actually sending them and keeps them in
    `notifications_sent`. Set `fail = True` to simulate a provider outage.
    """

    def __init__(self):
        """Initialize mock notification service."""
        self.notifications_sent: List[Dict[str, Any]] = []
        self.fail = False
        logger.info("MockNotificationService initialized (console logging)")

    async def send(
        self,
        template: NotificationTemplate,
        recipient: str,
        data: Dict[str, Any],
    ) -> bool:
        """
        Simulate a templated email.

        Raises:
            ConnectionError: When `fail` is set
        """
        if self.fail:
            raise ConnectionError("Mock mail provider unavailable")

        self.notifications_sent.append({
            "type": template.value,
            "recipient": recipient,
            "data": data,
        })
        logger.info(
            f"✅ 🔔 EMAIL {template.value}:\n"
            f"   To: {recipient}\n"
            f"   Order: {data.get('order_number')}"
        )
        return True

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Simulate an operator alert.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        self.notifications_sent.append({
            "type": "alert",
            "message": message,
            "severity": severity,
        })

        severity_emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.info(
            f"{severity_emoji} 🔔 ALERT (severity={severity}):\n"
            f"   {message}"
        )

    def get_notifications(self, type_: str = None) -> list:
        """Get sent notifications, optionally filtered by type (for testing)."""
        if type_ is None:
            return list(self.notifications_sent)
        return [n for n in self.notifications_sent if n["type"] == type_]

    def clear(self) -> None:
        """Clear notifications (for testing)."""
        self.notifications_sent.clear()
        logger.info("🗑️ Notifications cleared")
