"""Unit of Work pattern for atomic transactions."""

from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.value_objects import ExecutionID

from .repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyAddressRepository,
    SqlAlchemyLocationRepository,
    SqlAlchemyOrderRepository,
)


logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories

    Nothing is committed unless commit() is called; leaving the block with
    an exception rolls back.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None

        self._orders: Optional[SqlAlchemyOrderRepository] = None
        self._accounts: Optional[SqlAlchemyAccountRepository] = None
        self._addresses: Optional[SqlAlchemyAddressRepository] = None
        self._locations: Optional[SqlAlchemyLocationRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close the session."""
        if exc_type is not None:
            await self._session.rollback()
            logger.warning(f"[{self._execution_id}] Transaction rolled back: {exc_val!r}")
        await self._session.close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository."""
        if self._orders is None:
            self._orders = SqlAlchemyOrderRepository(self._require_session())
        return self._orders

    @property
    def accounts(self) -> SqlAlchemyAccountRepository:
        """Lazy-load account repository."""
        if self._accounts is None:
            self._accounts = SqlAlchemyAccountRepository(self._require_session())
        return self._accounts

    @property
    def addresses(self) -> SqlAlchemyAddressRepository:
        """Lazy-load address repository."""
        if self._addresses is None:
            self._addresses = SqlAlchemyAddressRepository(self._require_session())
        return self._addresses

    @property
    def locations(self) -> SqlAlchemyLocationRepository:
        """Lazy-load country/region lookup repository."""
        if self._locations is None:
            self._locations = SqlAlchemyLocationRepository(self._require_session())
        return self._locations

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self._require_session().commit()
        logger.info(f"[{self._execution_id}] ✅ Transaction committed")

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self._require_session().rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
