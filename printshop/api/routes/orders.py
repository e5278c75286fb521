"""Order tracking and status endpoints."""

from fastapi import APIRouter, HTTPException, status

from printshop.api.deps import Tracking
from printshop.schemas.order import OrderRecord, StatusUpdateRequest, TrackedOrder

router = APIRouter()


@router.get("/pending-count")
async def pending_count(tracking: Tracking) -> dict[str, int]:
    """Number of orders waiting for confirmation (back-office badge)."""
    return {"pending": await tracking.pending_count()}


@router.get("/track/{order_number}", response_model=TrackedOrder)
async def track_order(order_number: str, tracking: Tracking) -> TrackedOrder:
    order = await tracking.track(order_number)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=OrderRecord)
async def update_status(order_id: str, request: StatusUpdateRequest, tracking: Tracking) -> OrderRecord:
    return await tracking.update_status(order_id, request.status)
