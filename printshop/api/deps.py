"""FastAPI dependencies for dependency injection.

Provides:
- Database session per request
- Stores (overridable in tests)
- Services built on top of the stores
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.infra.database import get_db_session
from printshop.services.cart_service import CartService
from printshop.services.catalog_store import CatalogStore, SqlCatalogStore
from printshop.services.checkout_service import CheckoutService
from printshop.services.order_tracking import OrderTracking
from printshop.services.persistence_gateway import OrderGateway, SqlOrderGateway
from printshop.services.schedule_queue import ScheduleQueue
from printshop.services.settings_store import SettingsStore, SqlSettingsStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request."""
    async with get_db_session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_order_gateway(session: DbSession) -> OrderGateway:
    return SqlOrderGateway(session)


async def get_catalog_store(session: DbSession) -> CatalogStore:
    return SqlCatalogStore(session)


async def get_settings_store(session: DbSession) -> SettingsStore:
    return SqlSettingsStore(session)


# Type aliases for cleaner annotations
Gateway = Annotated[OrderGateway, Depends(get_order_gateway)]
Catalog = Annotated[CatalogStore, Depends(get_catalog_store)]
SettingsSource = Annotated[SettingsStore, Depends(get_settings_store)]


async def get_cart_service(gateway: Gateway, catalog: Catalog, settings_store: SettingsSource) -> CartService:
    return CartService(gateway, catalog, settings_store)


async def get_checkout_service(gateway: Gateway, settings_store: SettingsSource) -> CheckoutService:
    return CheckoutService(gateway, settings_store)


async def get_order_tracking(gateway: Gateway) -> OrderTracking:
    return OrderTracking(gateway)


async def get_schedule_queue(gateway: Gateway) -> ScheduleQueue:
    return ScheduleQueue(gateway)


Carts = Annotated[CartService, Depends(get_cart_service)]
Checkout = Annotated[CheckoutService, Depends(get_checkout_service)]
Tracking = Annotated[OrderTracking, Depends(get_order_tracking)]
Schedule = Annotated[ScheduleQueue, Depends(get_schedule_queue)]
