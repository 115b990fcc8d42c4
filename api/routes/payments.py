"""
Payment endpoints.

Gateway order creation and signed payment verification.
"""
from fastapi import APIRouter, Depends, status

from api.dependencies import get_payment_service
from core.application.dtos import PaymentIntentDTO, PaymentVerificationDTO, VerifyPaymentRequest
from core.application.services import PaymentService


router = APIRouter()


@router.post(
    "/{order_id}/payment-intent",
    response_model=PaymentIntentDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create payment intent",
    description="Create the gateway order the checkout widget pays against",
)
async def create_payment_intent(
    order_id: int,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Create a gateway order for a pay-now order.

    **Errors:**
    - 400: Cash on delivery, already paid or zero total
    - 404: Order not found
    - 502: Gateway rejected the request
    - 503: Gateway unreachable (payment stays pending)
    """
    return await service.create_payment_intent(order_id)


@router.post(
    "/{order_id}/payment-verify",
    response_model=PaymentVerificationDTO,
    summary="Verify payment",
    description="Check the gateway signature and mark the order paid",
)
async def verify_payment(
    order_id: int,
    request: VerifyPaymentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Verify a payment callback. Repeating a verified callback is a no-op.

    **Errors:**
    - 400: Invalid signature (`{"verified": false}`)
    - 404: Order not found
    """
    return await service.verify_payment(
        order_id,
        gateway_payment_id=request.gateway_payment_id,
        gateway_order_id=request.gateway_order_id,
        signature=request.signature,
    )
