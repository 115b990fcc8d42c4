"""
Checkout Service.

Turns a checkout request into a persisted order in one transaction:
identity, addresses, order header, line items and shipping stub either all
persist or none do. The confirmation email goes out only after commit.
"""
from decimal import Decimal
from typing import List
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.checkout_dto import PlaceOrderRequest
from core.application.dtos.order_dto import AccountContactDTO, OrderDTO, PlacedOrderDTO
from core.application.services.address_recorder import AddressRecorder
from core.application.services.identity_resolver import IdentityResolver
from core.application.services.notification_dispatcher import NotificationDispatcher
from core.data.uow import create_uow
from core.domain.entities.cart import CartItem
from core.domain.entities.order import Order, OrderLineItem, ShippingDetail
from core.domain.enums import PaymentMethod
from core.domain.exceptions import OrderCreationError, OrderValidationError
from core.domain.services.pricing import (
    OrderTotals,
    SuppliedTotals,
    compute_totals,
    reconcile_totals,
)
from core.domain.services.shipping import ShippingTariff
from core.domain.value_objects import Money
from core.settings.modules.checkout_settings import CheckoutSettings
from core.utils.datetime import utc_now


logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Application service for placing orders.

    Responsibilities:
    - Validate and price the request before any write
    - Run identity, addresses and order inserts in one UnitOfWork
    - Wrap storage failures as OrderCreationError
    - Send the confirmation after commit, best effort
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        identity_resolver: IdentityResolver,
        address_recorder: AddressRecorder,
        dispatcher: NotificationDispatcher,
        checkout_settings: CheckoutSettings,
        tariff: ShippingTariff,
    ) -> None:
        """Initialize checkout service.

        Args:
            session_factory: SQLAlchemy async session factory
            identity_resolver: Finds or creates the owning account
            address_recorder: Persists billing/delivery addresses
            dispatcher: Customer notifications
            checkout_settings: Tax rate, base currency and totals tolerance
            tariff: Shipping price table
        """
        self._session_factory = session_factory
        self._identity = identity_resolver
        self._addresses = address_recorder
        self._dispatcher = dispatcher
        self._settings = checkout_settings
        self._tariff = tariff

    async def place_order(self, request: PlaceOrderRequest) -> PlacedOrderDTO:
        """Place an order.

        Args:
            request: Normalized checkout request

        Returns:
            PlacedOrderDTO with order, account contact and payment hint

        Raises:
            OrderValidationError: Totals do not reconcile or discount invalid
            OrderCreationError: Any failure inside the transaction
        """
        cart = request.cart_items()
        totals = self._price(request, cart)
        payment_method = PaymentMethod.from_checkout(request.payment_method)

        uow = create_uow(self._session_factory)
        execution_id = None
        try:
            async with uow:
                execution_id = uow.execution_id
                logger.info(
                    f"[{execution_id}] Placing order for {request.email} "
                    f"({len(cart)} lines, total {totals.total} {request.currency})"
                )

                # =============================================================
                # Step 1: Identity
                # =============================================================
                identity = await self._identity.resolve(uow, request)
                account = identity.account

                # =============================================================
                # Step 2: Addresses
                # =============================================================
                await self._addresses.record(uow, account.id, request)

                # =============================================================
                # Step 3: Order header, line items, shipping stub
                # =============================================================
                order = self._build_order(request, cart, totals, payment_method, account.id)
                order = await uow.orders.add(order)

                await uow.commit()
        except OrderValidationError:
            raise
        except Exception as e:
            logger.error(f"[{execution_id}] ❌ Failed to create order: {e}", exc_info=True)
            raise OrderCreationError("Failed to create order") from e

        logger.info(f"[{execution_id}] ✅ Order {order.order_number} placed for account {account.id}")

        # =====================================================================
        # Step 4: Confirmation (after commit, never fails the checkout)
        # =====================================================================
        confirmation_sent = await self._dispatcher.order_confirmation(order, account, execution_id)

        return PlacedOrderDTO(
            order=OrderDTO.from_domain(order),
            account=AccountContactDTO.from_domain(account),
            account_created=identity.created,
            requires_payment=payment_method.requires_gateway,
            confirmation_sent=confirmation_sent,
            session_token=identity.session_token,
        )

    def _price(self, request: PlaceOrderRequest, cart: List[CartItem]) -> OrderTotals:
        """Compute server-side totals and check them against the client's."""
        try:
            totals = compute_totals(
                cart,
                currency=request.currency,
                method=request.shipping_method_enum,
                tariff=self._tariff,
                tax_rate=self._settings.tax_rate,
                discount=request.discount,
            )
        except ValueError as e:
            raise OrderValidationError(str(e), fields=["discount"]) from e

        mismatches = reconcile_totals(
            SuppliedTotals(
                tax=request.tax,
                delivery_charge=request.delivery_charge,
                total=request.total,
            ),
            totals,
            tolerance=self._settings.totals_tolerance,
        )
        if mismatches:
            logger.warning(
                f"Rejected checkout for {request.email}: totals mismatch on {mismatches} "
                f"(expected total {totals.total}, got {request.total})"
            )
            raise OrderValidationError(
                f"Order totals do not match: {', '.join(mismatches)}",
                fields=mismatches,
            )

        if totals.total <= Decimal("0") and PaymentMethod.from_checkout(request.payment_method).requires_gateway:
            raise OrderValidationError("Order total must be positive for online payment", fields=["total"])

        return totals

    def _build_order(
        self,
        request: PlaceOrderRequest,
        cart: List[CartItem],
        totals: OrderTotals,
        payment_method: PaymentMethod,
        account_id: int,
    ) -> Order:
        local = request.currency == self._tariff.base_currency.upper()
        items = [
            OrderLineItem(
                product_id=item.product_id,
                unit_price=Money(amount=item.unit_price(local), currency=request.currency),
                quantity=item.quantity,
                title=item.title,
                variant_id=item.variant.id if item.variant else None,
                variation=item.variant.snapshot() if item.variant else None,
            )
            for item in cart
        ]

        shipping_method = request.shipping_method_enum
        shipping = ShippingDetail.stub(shipping_method) if shipping_method is not None else None

        return Order(
            account_id=account_id,
            total=totals.total,
            currency=request.currency,
            payment_method=payment_method,
            placed_at=utc_now(),
            delivery_charge=totals.delivery_charge,
            tax_amount=totals.tax,
            discount_amount=totals.discount,
            coupon_code=request.coupon_code or None,
            notes=request.notes or None,
            items=items,
            shipping_detail=shipping,
        )
