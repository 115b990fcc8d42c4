"""
Fulfilment endpoints.

Admin status transitions and shipment tracking.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_order_status_service
from core.application.dtos import StatusChangeDTO, StatusUpdateRequest, TrackingRequest
from core.application.services import OrderStatusService


router = APIRouter()


@router.patch(
    "/{order_id}/status",
    response_model=StatusChangeDTO,
    summary="Change order status",
)
async def update_status(
    order_id: int,
    request: StatusUpdateRequest,
    service: OrderStatusService = Depends(get_order_status_service),
):
    """
    Move an order to a new status.

    **Errors:**
    - 404: Order not found
    - 409: Transition not allowed
    """
    return await service.update_status(order_id, request.status)


@router.post(
    "/{order_id}/tracking",
    response_model=StatusChangeDTO,
    summary="Add tracking",
)
async def add_tracking(
    order_id: int,
    request: TrackingRequest,
    service: OrderStatusService = Depends(get_order_status_service),
):
    """
    Attach tracking to the shipment, advancing the order to shipped if needed.

    **Errors:**
    - 404: Order not found
    - 409: Order is cancelled or returned
    """
    return await service.add_tracking(
        order_id,
        tracking_id=request.tracking_id,
        courier_name=request.courier_name,
        tracking_url=request.tracking_url,
        status=request.status,
    )
