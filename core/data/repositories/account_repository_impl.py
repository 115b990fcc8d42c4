"""SQLAlchemy implementations of account, address and location repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.account import Account, Address
from core.domain.enums import AddressKind
from core.domain.repositories.account_repository import (
    AccountRepository,
    AddressRepository,
    LocationRepository,
)

from ..mappers import AccountMapper, AddressMapper
from ..models.account_model import AccountModel, AddressModel, CountryModel, RegionModel


class SqlAlchemyAccountRepository(AccountRepository):
    """Concrete implementation of AccountRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, account_id: int) -> Optional[Account]:
        model = await self._session.get(AccountModel, account_id)
        return AccountMapper.to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Look up an account by email.

        Args:
            email: Normalized (lowercase, stripped) email

        Returns:
            Account if found, None otherwise
        """
        result = await self._session.execute(
            select(AccountModel).where(AccountModel.email == email)
        )
        model = result.scalar_one_or_none()
        return AccountMapper.to_domain(model) if model else None

    async def add(self, account: Account) -> Account:
        model = AccountMapper.to_persistence(account)
        self._session.add(model)
        await self._session.flush()
        account.id = model.id
        account.created_at = model.created_at
        return account


class SqlAlchemyAddressRepository(AddressRepository):
    """Concrete implementation of AddressRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, address: Address) -> Address:
        model = AddressMapper.to_persistence(address)
        self._session.add(model)
        await self._session.flush()
        address.id = model.id
        address.created_at = model.created_at
        return address

    async def latest(self, account_id: int, kind: AddressKind) -> Optional[Address]:
        """Most recent address of a kind with country and region names.

        Args:
            account_id: Owning account
            kind: Billing or delivery

        Returns:
            Address if the account has one of that kind
        """
        result = await self._session.execute(
            select(AddressModel, CountryModel.name, RegionModel.name)
            .outerjoin(CountryModel, CountryModel.id == AddressModel.country_id)
            .outerjoin(RegionModel, RegionModel.id == AddressModel.region_id)
            .where(AddressModel.account_id == account_id, AddressModel.kind == kind.value)
            .order_by(AddressModel.created_at.desc(), AddressModel.id.desc())
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None
        model, country_name, region_name = row
        return AddressMapper.to_domain(model, country_name, region_name)


class SqlAlchemyLocationRepository(LocationRepository):
    """Country/region lookups with case-insensitive contains matching."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_country_id(self, name: str) -> Optional[int]:
        if not name or not name.strip():
            return None
        result = await self._session.execute(
            select(CountryModel.id)
            .where(CountryModel.name.ilike(f"%{name.strip()}%"))
            .order_by(CountryModel.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def first_country_id(self) -> Optional[int]:
        result = await self._session.execute(
            select(CountryModel.id).order_by(CountryModel.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_region_id(self, country_id: Optional[int], name: str) -> Optional[int]:
        if not name or not name.strip():
            return None
        query = select(RegionModel.id).where(RegionModel.name.ilike(f"%{name.strip()}%"))
        if country_id is not None:
            query = query.where(RegionModel.country_id == country_id)
        result = await self._session.execute(query.order_by(RegionModel.id).limit(1))
        return result.scalar_one_or_none()

    async def first_region_id(self, country_id: Optional[int] = None) -> Optional[int]:
        query = select(RegionModel.id)
        if country_id is not None:
            query = query.where(RegionModel.country_id == country_id)
        result = await self._session.execute(query.order_by(RegionModel.id).limit(1))
        return result.scalar_one_or_none()
