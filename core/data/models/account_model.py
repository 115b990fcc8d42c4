"""SQLAlchemy ORM models for accounts, addresses and location lookups."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from core.utils.datetime import utc_now

from .base import Base


class AccountModel(Base):
    """SQLAlchemy ORM model for accounts table."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    newsletter_opt_in = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    addresses = relationship("AddressModel", back_populates="account")
    orders = relationship("OrderModel", back_populates="account")

    def __repr__(self):
        return f"<Account(id={self.id}, email={self.email})>"


class CountryModel(Base):
    """SQLAlchemy ORM model for countries lookup table."""

    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    code = Column(String(3), nullable=True)

    regions = relationship("RegionModel", back_populates="country")


class RegionModel(Base):
    """SQLAlchemy ORM model for regions (states) lookup table."""

    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    country = relationship("CountryModel", back_populates="regions")


class AddressModel(Base):
    """SQLAlchemy ORM model for addresses table (billing and delivery)."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    kind = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)
    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    phone = Column(String(32), nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=True)
    is_default = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    account = relationship("AccountModel", back_populates="addresses")
    country = relationship("CountryModel")
    region = relationship("RegionModel")

    __table_args__ = (
        Index('idx_address_account_kind', 'account_id', 'kind'),
    )

    def __repr__(self):
        return f"<Address(id={self.id}, account_id={self.account_id}, kind={self.kind})>"
