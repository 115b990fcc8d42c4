"""Shared pytest fixtures: in-memory database, mock adapters and services."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from core.application.services import (
    AddressRecorder,
    CheckoutService,
    IdentityResolver,
    NotificationDispatcher,
    OrderApplicationService,
    OrderStatusService,
    PaymentService,
)
from core.data.models import Base
from core.data.models.account_model import CountryModel, RegionModel
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.database.config import (
    DatabaseSettings,
    create_engine,
    create_session_factory,
)
from core.domain.services.shipping import DEFAULT_TARIFF
from core.settings.modules.auth_settings import AuthSettings
from core.settings.modules.checkout_settings import CheckoutSettings


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


async def create_seeded_engine(database_url: str):
    """Create an engine with the schema and seeded location tables."""
    engine = create_engine(DatabaseSettings(database_url=database_url))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = create_session_factory(engine)
    async with factory() as session:
        india = CountryModel(name="India", code="IN")
        usa = CountryModel(name="United States", code="US")
        session.add_all([india, usa])
        await session.flush()
        session.add_all([
            RegionModel(country_id=india.id, name="Kerala"),
            RegionModel(country_id=india.id, name="Karnataka"),
            RegionModel(country_id=usa.id, name="California"),
        ])
        await session.commit()

    return engine


@pytest_asyncio.fixture
async def engine():
    """Create test database engine with seeded location tables."""
    engine = await create_seeded_engine(TEST_DATABASE_URL)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """File-backed SQLite engine; each session gets its own connection."""
    engine = await create_seeded_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def notifications():
    return MockNotificationService()


@pytest.fixture
def alerts():
    return MockNotificationService()


@pytest.fixture
def gateway():
    return MockPaymentGateway(secret="test_secret", key_id="rzp_test_key")


@pytest.fixture
def auth_settings():
    return AuthSettings(session_secret="test-session-secret", password_iterations=1000)


@pytest.fixture
def dispatcher(notifications):
    return NotificationDispatcher(notifications)


@pytest.fixture
def checkout_service(session_factory, dispatcher, auth_settings):
    return CheckoutService(
        session_factory=session_factory,
        identity_resolver=IdentityResolver(auth_settings),
        address_recorder=AddressRecorder(),
        dispatcher=dispatcher,
        checkout_settings=CheckoutSettings(),
        tariff=DEFAULT_TARIFF,
    )


@pytest.fixture
def payment_service(session_factory, gateway, dispatcher, alerts):
    return PaymentService(session_factory, gateway, dispatcher, alerts)


@pytest.fixture
def status_service(session_factory, dispatcher):
    return OrderStatusService(session_factory, dispatcher)


@pytest.fixture
def order_service(session_factory, dispatcher):
    return OrderApplicationService(session_factory, dispatcher)


@pytest.fixture
def checkout_payload():
    """Checkout form for one item: 500 x 2, 300g each, INR standard shipping."""
    return {
        "firstName": "Asha",
        "lastName": "Menon",
        "email": "Asha.Menon@Example.com",
        "phone": "9876543210",
        "billing": {
            "address1": "12 MG Road, Ernakulam",
            "city": "Kochi",
            "state": "Kerala",
            "postalCode": "682011",
            "country": "India",
        },
        "items": [
            {"productId": 7, "title": "Handloom Saree", "quantity": 2, "price": "500", "weight": "300"},
        ],
        "currency": "INR",
        "shippingMethod": "standard",
        "paymentMethod": "card",
        "tax": "100.00",
        "deliveryCharge": "90.00",
        "total": "1190.00",
    }


@pytest.fixture
def row_count(session_factory):
    """Async callable returning the number of rows in a model's table."""

    async def _count(model) -> int:
        async with session_factory() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar_one()

    return _count
