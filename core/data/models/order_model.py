"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from core.utils.datetime import utc_now

from .base import Base


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False, default="pending")
    order_status = Column(String(20), nullable=False, default="placed")
    placed_at = Column(DateTime, default=utc_now, nullable=False)
    delivery_charge = Column(Numeric(12, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    coupon_code = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    gateway_order_id = Column(String(100), nullable=True)
    payment_details = Column(JSON, nullable=True)

    account = relationship("AccountModel", back_populates="orders")
    items = relationship(
        "OrderLineItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineItemModel.id",
    )
    shipping_detail = relationship(
        "ShippingDetailModel",
        back_populates="order",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (
        Index('idx_order_account', 'account_id'),
        Index('idx_order_status_placed', 'order_status', 'placed_at'),
    )

    def __repr__(self):
        return (
            f"<Order(id={self.id}, status={self.order_status}, "
            f"payment={self.payment_status})>"
        )


class OrderLineItemModel(Base):
    """SQLAlchemy ORM model for order_line_items table."""

    __tablename__ = "order_line_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    variant_id = Column(Integer, nullable=True)
    title = Column(String(500), nullable=False, default="")
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
    variation = Column(JSON, nullable=True)

    order = relationship("OrderModel", back_populates="items")


class ShippingDetailModel(Base):
    """SQLAlchemy ORM model for shipping_details table (one per order)."""

    __tablename__ = "shipping_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, unique=True)
    courier_name = Column(String(100), nullable=False)
    tracking_id = Column(String(100), nullable=False)
    tracking_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="processing")
    shipping_date = Column(DateTime, nullable=True)

    order = relationship("OrderModel", back_populates="shipping_detail")
