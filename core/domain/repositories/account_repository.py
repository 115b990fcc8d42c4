"""Repository interfaces for accounts, addresses and location reference data."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.account import Account, Address
from ..enums import AddressKind


class AccountRepository(ABC):
    """Abstract repository for purchaser accounts."""

    @abstractmethod
    async def get(self, account_id: int) -> Optional[Account]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Look up an account by its (normalized) email."""
        pass

    @abstractmethod
    async def add(self, account: Account) -> Account:
        """Insert an account and return it with its id."""
        pass


class AddressRepository(ABC):
    """Abstract repository for account addresses."""

    @abstractmethod
    async def add(self, address: Address) -> Address:
        pass

    @abstractmethod
    async def latest(self, account_id: int, kind: AddressKind) -> Optional[Address]:
        """Most recently recorded address of a kind, with country/region names."""
        pass


class LocationRepository(ABC):
    """Country and region lookup tables."""

    @abstractmethod
    async def find_country_id(self, name: str) -> Optional[int]:
        """First country whose name contains `name` (case-insensitive)."""
        pass

    @abstractmethod
    async def first_country_id(self) -> Optional[int]:
        pass

    @abstractmethod
    async def find_region_id(self, country_id: Optional[int], name: str) -> Optional[int]:
        """First region of the country whose name contains `name`."""
        pass

    @abstractmethod
    async def first_region_id(self, country_id: Optional[int] = None) -> Optional[int]:
        """First region of the country, or of the whole store when None."""
        pass
