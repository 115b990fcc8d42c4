"""
Account and address entities.

CRITICAL: This file must contain ZERO imports from sqlalchemy/pydantic/fastapi
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..enums import AccountStatus, AddressKind


@dataclass
class Account:
    """Purchaser identity. Email is unique and is the merge key for guests."""

    email: str
    name: str
    password_hash: str
    phone: Optional[str] = None
    status: AccountStatus = AccountStatus.ACTIVE
    newsletter_opt_in: bool = False
    created_at: Optional[datetime] = None
    id: Optional[int] = None


@dataclass
class Address:
    """Billing or delivery address owned by an account."""

    account_id: int
    kind: AddressKind
    name: str
    line1: str
    city: str
    postal_code: str
    line2: Optional[str] = None
    phone: Optional[str] = None
    country_id: Optional[int] = None
    region_id: Optional[int] = None
    is_default: bool = True
    country_name: Optional[str] = None
    region_name: Optional[str] = None
    created_at: Optional[datetime] = None
    id: Optional[int] = None
