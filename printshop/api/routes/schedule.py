"""Print schedule endpoints."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from printshop.api.deps import Schedule
from printshop.schemas.schedule import MoveRequest, PrintSchedule, ReorderRequest, ReorderResult

router = APIRouter()


def reorder_response(result: ReorderResult) -> ReorderResult | JSONResponse:
    """200 on success, 409 when the priority column is missing, 500 otherwise."""
    if result.ok:
        return result
    code = (
        status.HTTP_409_CONFLICT
        if result.missing_priority_column
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    content = result.model_dump(mode="json")
    content["message"] = result.message
    return JSONResponse(status_code=code, content=content)


@router.get("", response_model=PrintSchedule)
async def get_schedule(queue: Schedule) -> PrintSchedule:
    return await queue.load()


@router.put("", response_model=ReorderResult)
async def reorder(request: ReorderRequest, queue: Schedule) -> ReorderResult | JSONResponse:
    """Persist the displayed queue order as priorities 1..n."""
    return reorder_response(await queue.reorder(request.order_ids))


@router.post("/move", response_model=ReorderResult)
async def move_order(request: MoveRequest, queue: Schedule) -> ReorderResult | JSONResponse:
    """Move one order to a new queue position."""
    try:
        result = await queue.move_order(request.order_id, request.to_index)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order is not in the print queue") from None
    return reorder_response(result)
