"""
Order endpoints.

Checkout, order queries, guest tracking and invoices.
"""
from datetime import datetime
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_checkout_service, get_order_service, get_settings
from core.application.dtos import (
    InvoiceResultDTO,
    OrderDetailDTO,
    OrderDTO,
    OrderListDTO,
    PlacedOrderDTO,
    PlaceOrderRequest,
)
from core.application.services import CheckoutService, OrderApplicationService
from core.domain.enums import OrderStatus
from core.settings import AppSettings


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# PLACE ORDER
# =============================================================================

@router.post(
    "",
    response_model=PlacedOrderDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="Create account (if needed), addresses, order and line items in one transaction",
)
async def place_order(
    request: PlaceOrderRequest,
    response: Response,
    service: CheckoutService = Depends(get_checkout_service),
    settings: AppSettings = Depends(get_settings),
):
    """
    Place an order.

    **Body:** checkout form, snake_case or camelCase.

    **Returns:**
    - Order with lines, customer contact and whether gateway payment is required
    - A session cookie when the checkout registered a new account
    """
    placed = await service.place_order(request)

    if placed.session_token:
        auth = settings.auth
        response.set_cookie(
            key=auth.cookie_name,
            value=placed.session_token,
            max_age=auth.session_ttl_days * 24 * 60 * 60,
            httponly=True,
            secure=auth.cookie_secure,
            samesite="lax",
        )

    return placed


# =============================================================================
# LIST ORDERS
# =============================================================================

@router.get(
    "",
    response_model=OrderListDTO,
    summary="List orders",
    description="Search, filter, sort and paginate orders",
)
async def list_orders(
    search: Optional[str] = Query(None, description="Customer name/email, coupon code or order number"),
    page: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    sort: str = Query("latest", description="latest | oldest | high_value | low_value"),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    account_id: Optional[int] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    service: OrderApplicationService = Depends(get_order_service),
):
    return await service.list_orders(
        search=search,
        page=page,
        limit=limit,
        sort=sort,
        status=order_status,
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
    )


# =============================================================================
# GUEST LOOKUPS (declared before /{order_id})
# =============================================================================

@router.get(
    "/track",
    response_model=OrderDetailDTO,
    summary="Track an order",
    description="Order details for a guest who knows the order id and email",
)
async def track_order(
    order_id: int = Query(...),
    email: str = Query(..., min_length=3),
    service: OrderApplicationService = Depends(get_order_service),
):
    return await service.track_order(order_id, email)


@router.get(
    "/by-email",
    response_model=List[OrderDTO],
    summary="Orders for an email",
)
async def orders_by_email(
    email: str = Query(..., min_length=3),
    service: OrderApplicationService = Depends(get_order_service),
):
    return await service.orders_for_email(email)


# =============================================================================
# GET ORDER / INVOICE
# =============================================================================

@router.get(
    "/{order_id}",
    response_model=OrderDetailDTO,
    summary="Get order details",
)
async def get_order(
    order_id: int,
    service: OrderApplicationService = Depends(get_order_service),
):
    """
    Get order with customer contact and latest billing/delivery addresses.

    **Errors:**
    - 404: Order not found
    """
    return await service.get_order_details(order_id)


@router.post(
    "/{order_id}/invoice",
    response_model=InvoiceResultDTO,
    summary="Email the invoice",
)
async def send_invoice(
    order_id: int,
    service: OrderApplicationService = Depends(get_order_service),
):
    result = await service.send_invoice(order_id)
    logger.info(f"Invoice request for order {order_id}: sent={result.sent}")
    return result
