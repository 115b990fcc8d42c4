"""
Slack Notification Service Implementation.

Sends operator alerts via Slack Webhook API.
"""
import logging
import aiohttp

from core.application.interfaces import IOperatorAlertService
from core.settings.modules.integrations_settings import SlackSettings


logger = logging.getLogger(__name__)


class SlackNotificationService(IOperatorAlertService):
    """
    Slack implementation of operator alerts.

    Sends alerts via Slack Webhook API. Delivery is best effort: failures
    are logged, never raised.
    """

    def __init__(self, settings: SlackSettings):
        """
        Initialize Slack notification service.

        Args:
            settings: Slack settings with webhook URL
        """
        self.settings = settings
        self.webhook_url = settings.webhook_url
        self.prefix = settings.prefix
        self.min_severity = settings.min_severity
        logger.info("SlackNotificationService initialized")

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send an operator alert.

        Args:
            message: Alert text
            severity: Severity level (0-100, higher = more critical)
        """
        if severity < self.min_severity:
            logger.debug(f"Slack alert below min severity ({severity}): {message}")
            return
        color = "danger" if severity >= 80 else "warning" if severity >= 50 else "good"
        await self._send_message(f"{self.prefix} {message}", color=color)

    async def _send_message(self, text: str, color: str = "good") -> None:
        """
        Send message to Slack.

        Args:
            text: Message text
            color: Attachment color (good, warning, danger)
        """
        if not self.webhook_url:
            logger.warning("Slack webhook_url not configured, skipping notification")
            return

        try:
            async with aiohttp.ClientSession() as session:
                payload = {
                    "attachments": [
                        {
                            "color": color,
                            "text": text,
                            "mrkdwn_in": ["text"],
                        }
                    ]
                }

                async with session.post(self.webhook_url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            f"Slack API error: {response.status} - {error_text}"
                        )
                    else:
                        logger.info("Slack notification sent successfully")
        except Exception as e:
            logger.error(f"Failed to send Slack notification: {e}", exc_info=True)
