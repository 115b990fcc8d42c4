"""
FastAPI Dependencies.

Provides dependency injection for settings, storage, adapters and the
application services built on top of them.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import (
    INotificationService,
    IOperatorAlertService,
    IPaymentGateway,
)
from core.application.services import (
    AddressRecorder,
    CheckoutService,
    IdentityResolver,
    NotificationDispatcher,
    OrderApplicationService,
    OrderStatusService,
    PaymentService,
)
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.database.config import create_engine, create_session_factory
from core.settings import AppSettings, get_app_settings


logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None
_notification_service: Optional[INotificationService] = None
_alert_service: Optional[IOperatorAlertService] = None
_payment_gateway: Optional[IPaymentGateway] = None


# =============================================================================
# INFRASTRUCTURE
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
        logger.info("Created session factory")
    return _session_factory


def get_notification_service() -> INotificationService:
    global _notification_service

    if _notification_service is None:
        settings = get_app_settings()

        if settings.mail.enabled:
            from core.infrastructure.adapters.notifications.email_notification_service import EmailNotificationService
            _notification_service = EmailNotificationService(settings.mail)
            logger.info("Created EmailNotificationService instance")
        else:
            _notification_service = MockNotificationService()
            logger.info("Using MockNotificationService (mail disabled)")

    return _notification_service


def get_alert_service() -> IOperatorAlertService:
    global _alert_service

    if _alert_service is None:
        settings = get_app_settings()

        if settings.slack.enabled:
            from core.infrastructure.adapters.notifications.slack_notification_service import SlackNotificationService
            _alert_service = SlackNotificationService(settings.slack)
            logger.info("Created SlackNotificationService instance")
        else:
            _alert_service = MockNotificationService()
            logger.info("Using MockNotificationService for operator alerts (slack disabled)")

    return _alert_service


def get_payment_gateway() -> IPaymentGateway:
    global _payment_gateway

    if _payment_gateway is None:
        settings = get_app_settings()

        if settings.razorpay.enabled:
            from core.infrastructure.adapters.payments.razorpay_gateway import RazorpayGateway
            _payment_gateway = RazorpayGateway(settings.razorpay)
            logger.info("Created RazorpayGateway instance")
        else:
            _payment_gateway = MockPaymentGateway(
                secret=settings.razorpay.key_secret or "mock_secret",
                key_id=settings.razorpay.key_id or "rzp_test_mock",
            )
            logger.info("Using MockPaymentGateway (razorpay disabled)")

    return _payment_gateway


# =============================================================================
# APPLICATION SERVICES
# =============================================================================

def get_dispatcher(
    notification_service: INotificationService = Depends(get_notification_service),
) -> NotificationDispatcher:
    return NotificationDispatcher(notification_service)


def get_checkout_service(
    settings: AppSettings = Depends(get_settings),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> CheckoutService:
    return CheckoutService(
        session_factory=session_factory,
        identity_resolver=IdentityResolver(settings.auth),
        address_recorder=AddressRecorder(),
        dispatcher=dispatcher,
        checkout_settings=settings.checkout,
        tariff=settings.tariff,
    )


def get_payment_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    alerts: IOperatorAlertService = Depends(get_alert_service),
) -> PaymentService:
    return PaymentService(session_factory, gateway, dispatcher, alerts)


def get_order_status_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> OrderStatusService:
    return OrderStatusService(session_factory, dispatcher)


def get_order_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> OrderApplicationService:
    return OrderApplicationService(session_factory, dispatcher)


# =============================================================================
# SHUTDOWN / RESET
# =============================================================================

async def close_dependencies() -> None:
    """Close pooled HTTP sessions and the database engine."""
    from core.infrastructure.database.config import close_database

    if _notification_service is not None:
        await _notification_service.close()
    if _payment_gateway is not None:
        await _payment_gateway.close()
    await close_database(_engine)


def reset_dependencies():
    global _engine, _session_factory, _notification_service
    global _alert_service, _payment_gateway

    _engine = None
    _session_factory = None
    _notification_service = None
    _alert_service = None
    _payment_gateway = None

    logger.info("Dependencies reset")
