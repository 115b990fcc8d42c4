"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal
from typing import Optional

from core.domain.entities.account import Account, Address
from core.domain.entities.order import (
    Order,
    OrderLineItem,
    PaymentVerification,
    ShippingDetail,
)
from core.domain.enums import (
    AccountStatus,
    AddressKind,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingStatus,
)
from core.domain.value_objects import Money

from .models.account_model import AccountModel, AddressModel
from .models.order_model import OrderLineItemModel, OrderModel, ShippingDetailModel


def _decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class AccountMapper:
    """Static mapper for Account ↔ AccountModel transformation."""

    @staticmethod
    def to_domain(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            name=model.name,
            password_hash=model.password_hash,
            phone=model.phone,
            status=AccountStatus(model.status),
            newsletter_opt_in=bool(model.newsletter_opt_in),
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: Account) -> AccountModel:
        return AccountModel(
            email=entity.email,
            name=entity.name,
            password_hash=entity.password_hash,
            phone=entity.phone,
            status=entity.status.value,
            newsletter_opt_in=entity.newsletter_opt_in,
        )


class AddressMapper:
    """Static mapper for Address ↔ AddressModel transformation."""

    @staticmethod
    def to_domain(
        model: AddressModel,
        country_name: Optional[str] = None,
        region_name: Optional[str] = None,
    ) -> Address:
        """Convert ORM model to domain entity.

        Args:
            model: AddressModel instance
            country_name: Resolved country name, if joined
            region_name: Resolved region name, if joined

        Returns:
            Address domain entity
        """
        return Address(
            id=model.id,
            account_id=model.account_id,
            kind=AddressKind(model.kind),
            name=model.name,
            line1=model.line1,
            line2=model.line2,
            city=model.city,
            postal_code=model.postal_code,
            phone=model.phone,
            country_id=model.country_id,
            region_id=model.region_id,
            is_default=bool(model.is_default),
            country_name=country_name,
            region_name=region_name,
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: Address) -> AddressModel:
        return AddressModel(
            account_id=entity.account_id,
            kind=entity.kind.value,
            name=entity.name,
            line1=entity.line1,
            line2=entity.line2,
            city=entity.city,
            postal_code=entity.postal_code,
            phone=entity.phone,
            country_id=entity.country_id,
            region_id=entity.region_id,
            is_default=entity.is_default,
        )


class OrderLineItemMapper:
    """Static mapper for OrderLineItem ↔ OrderLineItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderLineItemModel, currency: str) -> OrderLineItem:
        return OrderLineItem(
            id=model.id,
            product_id=model.product_id,
            variant_id=model.variant_id,
            title=model.title or "",
            quantity=model.quantity,
            unit_price=Money(amount=_decimal(model.unit_price), currency=currency),
            variation=model.variation,
        )

    @staticmethod
    def to_persistence(entity: OrderLineItem, order_id: int) -> OrderLineItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderLineItem domain entity
            order_id: Owning order id

        Returns:
            OrderLineItemModel instance
        """
        return OrderLineItemModel(
            order_id=order_id,
            product_id=entity.product_id,
            variant_id=entity.variant_id,
            title=entity.title,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            variation=entity.variation,
        )


class ShippingDetailMapper:
    """Static mapper for ShippingDetail ↔ ShippingDetailModel transformation."""

    @staticmethod
    def to_domain(model: ShippingDetailModel) -> ShippingDetail:
        return ShippingDetail(
            id=model.id,
            courier_name=model.courier_name,
            tracking_id=model.tracking_id,
            tracking_url=model.tracking_url,
            status=ShippingStatus(model.status),
            shipping_date=model.shipping_date,
        )

    @staticmethod
    def to_persistence(entity: ShippingDetail, order_id: int) -> ShippingDetailModel:
        model = ShippingDetailModel(order_id=order_id)
        ShippingDetailMapper.update_persistence(model, entity)
        return model

    @staticmethod
    def update_persistence(model: ShippingDetailModel, entity: ShippingDetail) -> None:
        model.courier_name = entity.courier_name
        model.tracking_id = entity.tracking_id
        model.tracking_url = entity.tracking_url
        model.status = entity.status.value
        model.shipping_date = entity.shipping_date


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation.

    Line items and shipping detail must be eagerly loaded on the model.
    """

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain entity.

        Args:
            model: OrderModel with items and shipping_detail loaded

        Returns:
            Order domain entity
        """
        verification = None
        if model.payment_details:
            verification = PaymentVerification.from_dict(model.payment_details)

        shipping = None
        if model.shipping_detail is not None:
            shipping = ShippingDetailMapper.to_domain(model.shipping_detail)

        return Order(
            id=model.id,
            account_id=model.account_id,
            total=_decimal(model.total),
            currency=model.currency,
            payment_method=PaymentMethod(model.payment_method),
            payment_status=PaymentStatus(model.payment_status),
            order_status=OrderStatus(model.order_status),
            placed_at=model.placed_at,
            delivery_charge=_decimal(model.delivery_charge),
            tax_amount=_decimal(model.tax_amount),
            discount_amount=_decimal(model.discount_amount),
            coupon_code=model.coupon_code,
            notes=model.notes,
            gateway_order_id=model.gateway_order_id,
            payment_verification=verification,
            items=[
                OrderLineItemMapper.to_domain(item, model.currency)
                for item in model.items
            ],
            shipping_detail=shipping,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert the order header to an ORM model (items are inserted separately)."""
        return OrderModel(
            account_id=entity.account_id,
            total=entity.total,
            currency=entity.currency,
            payment_method=entity.payment_method.value,
            payment_status=entity.payment_status.value,
            order_status=entity.order_status.value,
            placed_at=entity.placed_at,
            delivery_charge=entity.delivery_charge,
            tax_amount=entity.tax_amount,
            discount_amount=entity.discount_amount,
            coupon_code=entity.coupon_code,
            notes=entity.notes,
            gateway_order_id=entity.gateway_order_id,
            payment_details=(
                entity.payment_verification.to_dict()
                if entity.payment_verification else None
            ),
        )
