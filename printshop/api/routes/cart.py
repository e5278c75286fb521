"""Cart endpoints, keyed by an anonymous shopper session id."""

from fastapi import APIRouter, HTTPException, Response, status

from printshop.api.deps import Carts
from printshop.infra.logging import bind_request_context
from printshop.schemas.cart import AddCartItemRequest, CartLine, CartView, UpdateQuantityRequest

router = APIRouter()


@router.get("/{session_id}", response_model=CartView)
async def get_cart(session_id: str, carts: Carts) -> CartView:
    return await carts.view(session_id)


@router.post("/{session_id}/items", response_model=CartLine, status_code=status.HTTP_201_CREATED)
async def add_item(session_id: str, request: AddCartItemRequest, carts: Carts) -> CartLine:
    """Add a configured product; the unit price is computed here."""
    bind_request_context(session_id=session_id)
    return await carts.add(session_id, request)


@router.patch("/{session_id}/items/{line_id}", response_model=CartView)
async def update_item(
    session_id: str,
    line_id: str,
    request: UpdateQuantityRequest,
    carts: Carts,
) -> CartView:
    """Change a line's quantity; zero removes it."""
    line = await carts.update_quantity(session_id, line_id, request.quantity)
    if line is None and request.quantity > 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found")
    return await carts.view(session_id)


@router.delete("/{session_id}/items/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(session_id: str, line_id: str, carts: Carts) -> Response:
    if not await carts.remove(session_id, line_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart line not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(session_id: str, carts: Carts) -> Response:
    await carts.clear(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
