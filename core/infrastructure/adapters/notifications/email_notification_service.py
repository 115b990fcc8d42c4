"""
Email Notification Service Implementation.

Sends templated transactional emails through an HTTP mail API.
"""
from typing import Any, Dict, Optional
import asyncio
import logging

import aiohttp

from core.application.interfaces import INotificationService, NotificationTemplate
from core.settings.modules.mail_settings import MailSettings


logger = logging.getLogger(__name__)


class EmailNotificationService(INotificationService):
    """
    HTTP mail API implementation of notification service.

    Holds one pooled aiohttp session for its whole lifetime. The session is
    safe for concurrent use inside one event loop and is closed by close().
    """

    def __init__(
        self,
        settings: MailSettings,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize email notification service.

        Args:
            settings: Mail API endpoint, key and sender
            session: Shared aiohttp session; a pooled one is created lazily when omitted
        """
        self.settings = settings
        self._session = session
        self._owns_session = session is None
        logger.info("EmailNotificationService initialized")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=self.settings.pool_size),
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout_seconds),
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
            )
            self._owns_session = True
        return self._session

    async def send(
        self,
        template: NotificationTemplate,
        recipient: str,
        data: Dict[str, Any],
    ) -> bool:
        """
        Post one templated email to the mail API.

        Args:
            template: Template name
            recipient: Recipient email address
            data: Template variables

        Returns:
            True on a 2xx answer, False otherwise (never raises)
        """
        if not self.settings.api_url:
            logger.warning("Mail api_url not configured, skipping email")
            return False

        payload = {
            "from": self.settings.sender,
            "to": recipient,
            "template": template.value,
            "data": data,
        }

        try:
            async with self._get_session().post(self.settings.api_url, json=payload) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    logger.error(
                        f"❌ Mail API error for {template.value} to {recipient}: "
                        f"{response.status} - {error_text}"
                    )
                    return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ Failed to send {template.value} to {recipient}: {e!r}")
            return False

        logger.info(f"✅ Email {template.value} sent to {recipient}")
        return True

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("Mail session closed")
