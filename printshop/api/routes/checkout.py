"""Checkout endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from printshop.api.deps import Checkout
from printshop.infra.logging import bind_request_context, get_logger
from printshop.schemas.checkout import CheckoutQuote, CheckoutQuoteRequest, PlaceOrderRequest, PlaceOrderResponse

router = APIRouter()
logger = get_logger(__name__)


@router.post("/quote", response_model=CheckoutQuote)
async def quote(request: CheckoutQuoteRequest, checkout: Checkout) -> CheckoutQuote:
    """Fulfillment options and shipping for the address entered so far."""
    return await checkout.quote(request)


@router.post(
    "",
    response_model=PlaceOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        207: {"model": PlaceOrderResponse, "description": "Some units were created"},
        503: {"model": PlaceOrderResponse, "description": "No unit could be created"},
    },
)
async def place_order(request: PlaceOrderRequest, checkout: Checkout) -> PlaceOrderResponse | JSONResponse:
    """Create one order per unit.

    201 when every unit was created, 207 when only some were (the created
    order numbers are returned and stay valid), 503 when none were.
    """
    bind_request_context(session_id=request.session_id)
    response = await checkout.place_order(request)
    if response.complete:
        return response

    code = status.HTTP_207_MULTI_STATUS if response.order_numbers else status.HTTP_503_SERVICE_UNAVAILABLE
    logger.warning(
        "Checkout incomplete",
        checkout_id=response.checkout_id,
        created=len(response.order_numbers),
        expected=response.expected_units,
        status_code=code,
    )
    return JSONResponse(status_code=code, content=response.model_dump(mode="json"))
