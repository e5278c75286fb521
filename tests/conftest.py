"""Shared fixtures: in-memory stores, an SQLite session and an API client."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from printshop.api.deps import get_catalog_store, get_order_gateway, get_settings_store
from printshop.core.order_status import ACTIVE_STATUSES, OrderStatus
from printshop.main import app
from printshop.models import Base
from printshop.schemas.cart import CartLine
from printshop.schemas.catalog import ColorOption, ComplexityTierOption, MaterialOption, ProductOptions
from printshop.schemas.order import NewOrder, OrderProduct, OrderRecord
from printshop.services.catalog_store import CatalogStore
from printshop.services.persistence_gateway import (
    GatewayError,
    MissingPriorityColumnError,
    OrderGateway,
    OrderNotFoundError,
    generate_order_number,
)
from printshop.services.settings_store import SettingsStore

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

STORE_SETTINGS: dict[str, Any] = {
    "material_premium_upcharge": 3,
    "material_ultra_upcharge": 6,
    "size_small_upcharge": 0,
    "size_medium_upcharge": 5,
    "size_large_upcharge": 10,
    "color_premium_upcharge": 1,
    "color_ultra_upcharge": 2,
    "ams_base_fee": 2,
    "ams_per_color_fee": 1,
    "delivery_fee": 5,
    "shipping_fee": 8.99,
    "free_shipping_threshold": 50,
    "delivery_areas": ["Alpharetta, GA", "Cumming, GA"],
    "free_delivery_promo_code": "FREEDELIVERY",
    "promo_enabled": True,
    "profit_margin": 40,
    "business_currency_symbol": "$",
}


class InMemoryOrderGateway(OrderGateway):
    """OrderGateway keeping rows in dicts.

    ``fail_on_create`` makes the n-th create (1-based) raise;
    ``fail_priority_for`` makes priority updates for those ids raise;
    ``priority_column_missing`` simulates an unmigrated database.
    """

    def __init__(self, products: dict[str, ProductOptions] | None = None) -> None:
        self.orders: dict[str, OrderRecord] = {}
        self.carts: dict[str, list[CartLine]] = {}
        self.products = products or {}
        self.create_calls = 0
        self.priority_calls: list[tuple[str, int]] = []
        self.fail_on_create: int | None = None
        self.fail_priority_for: set[str] = set()
        self.priority_column_missing = False

    def add_order(self, **fields: Any) -> OrderRecord:
        values: dict[str, Any] = {
            "id": str(uuid4()),
            "order_number": generate_order_number(),
            "checkout_id": "seed",
            "status": "pending",
            "customer_name": "Ada",
            "customer_email": "ada@example.com",
            "fulfillment_type": "pickup",
            "delivery_location": "Cumming, GA",
            "shipping_cost": Decimal("0"),
            "product_price": Decimal("10"),
            "total_amount": Decimal("10"),
            "created_at": BASE_TIME,
        }
        values.update(fields)
        order = OrderRecord.model_validate(values)
        self.orders[order.id] = order
        return order

    async def create_order(self, order: NewOrder) -> OrderRecord:
        self.create_calls += 1
        if self.fail_on_create == self.create_calls:
            raise GatewayError("insert rejected")
        product = self.products.get(order.product_id or "")
        return self.add_order(
            **order.model_dump(),
            created_at=BASE_TIME + timedelta(seconds=self.create_calls),
            product=OrderProduct.model_validate(product) if product else None,
        )

    async def update_order_status(self, order_id: str, status: OrderStatus) -> OrderRecord:
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)
        updated = self.orders[order_id].model_copy(update={"status": status})
        self.orders[order_id] = updated
        return updated

    async def update_order_priority(self, order_id: str, priority: int) -> None:
        self.priority_calls.append((order_id, priority))
        if self.priority_column_missing:
            raise MissingPriorityColumnError()
        if order_id in self.fail_priority_for:
            raise GatewayError("update rejected")
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)
        self.orders[order_id] = self.orders[order_id].model_copy(update={"print_priority": priority})

    async def list_active_orders(self) -> list[OrderRecord]:
        return [o for o in self.orders.values() if o.status in ACTIVE_STATUSES]

    async def get_order(self, order_id: str) -> OrderRecord | None:
        return self.orders.get(order_id)

    async def get_order_by_number(self, order_number: str) -> OrderRecord | None:
        for order in self.orders.values():
            if order.order_number == order_number:
                return order
        return None

    async def count_orders_by_status(self, status: OrderStatus) -> int:
        return sum(1 for o in self.orders.values() if o.status == status)

    async def list_cart(self, session_id: str) -> list[CartLine]:
        return list(self.carts.get(session_id, []))

    async def add_cart_line(self, line: CartLine) -> CartLine:
        stored = line.model_copy(update={"id": str(uuid4())})
        self.carts.setdefault(line.session_id or "", []).append(stored)
        return stored

    async def update_cart_quantity(self, session_id: str, line_id: str, quantity: int) -> CartLine | None:
        lines = self.carts.get(session_id, [])
        for index, line in enumerate(lines):
            if line.id == line_id:
                lines[index] = line.model_copy(update={"quantity": quantity})
                return lines[index]
        return None

    async def remove_cart_line(self, session_id: str, line_id: str) -> bool:
        lines = self.carts.get(session_id, [])
        kept = [line for line in lines if line.id != line_id]
        self.carts[session_id] = kept
        return len(kept) != len(lines)

    async def clear_cart(self, session_id: str) -> int:
        return len(self.carts.pop(session_id, []))


class InMemoryCatalogStore(CatalogStore):
    def __init__(
        self,
        products: list[ProductOptions],
        colors: list[ColorOption],
        tiers: list[ComplexityTierOption],
        materials: list[MaterialOption] | None = None,
    ) -> None:
        self.products = {p.id: p for p in products}
        self.colors = colors
        self.tiers = tiers
        self.materials = materials or []

    async def get_product(self, product_id: str) -> ProductOptions | None:
        return self.products.get(product_id)

    async def list_colors(self) -> list[ColorOption]:
        return list(self.colors)

    async def list_materials(self) -> list[MaterialOption]:
        return list(self.materials)

    async def list_complexity_tiers(self) -> list[ComplexityTierOption]:
        return list(self.tiers)


class InMemorySettingsStore(SettingsStore):
    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self.values = dict(values or {})

    async def load_all(self) -> dict[str, Any]:
        return dict(self.values)

    async def save(self, key: str, value: Any) -> None:
        self.values[key] = value


@pytest.fixture
def keychain() -> ProductOptions:
    """Customizable two-color product."""
    return ProductOptions(
        id="prod-keychain",
        title="Name Keychain",
        price=Decimal("10"),
        is_customizable=True,
        colors=["Black", "White", "Silk Gold", "Carbon Black", "Low Red"],
        allowed_materials=["standard", "premium"],
        allowed_sizes=["small", "medium"],
        color_slots=[{"id": "base", "label": "Base"}, {"id": "text", "label": "Text"}],
        complexity_tier="simple",
        print_time_small=45,
        print_time_medium=90,
    )


@pytest.fixture
def vase() -> ProductOptions:
    return ProductOptions(
        id="prod-vase",
        title="Spiral Vase",
        price=Decimal("20"),
        colors=["Black", "White"],
        num_colors=1,
        complexity_tier="medium",
    )


@pytest.fixture
def color_options() -> list[ColorOption]:
    return [
        ColorOption(name="Black", hex_color="#000000", category="standard", stock_quantity=500),
        ColorOption(name="White", hex_color="#FFFFFF", category="standard", stock_quantity=None),
        ColorOption(name="Silk Gold", hex_color="#D4AF37", category="premium", stock_quantity=100),
        ColorOption(name="Carbon Black", hex_color="#1B1B1B", category="ultra", stock_quantity=250),
        ColorOption(name="Low Red", hex_color="#D32F2F", category="standard", stock_quantity=99),
    ]


@pytest.fixture
def complexity_tiers() -> list[ComplexityTierOption]:
    return [
        ComplexityTierOption(tier="simple", fee=Decimal("0")),
        ComplexityTierOption(tier="medium", fee=Decimal("3")),
        ComplexityTierOption(tier="complex", fee=Decimal("8")),
    ]


@pytest.fixture
def gateway(keychain: ProductOptions, vase: ProductOptions) -> InMemoryOrderGateway:
    return InMemoryOrderGateway(products={keychain.id: keychain, vase.id: vase})


@pytest.fixture
def catalog(
    keychain: ProductOptions,
    vase: ProductOptions,
    color_options: list[ColorOption],
    complexity_tiers: list[ComplexityTierOption],
) -> InMemoryCatalogStore:
    return InMemoryCatalogStore([keychain, vase], color_options, complexity_tiers)


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore(STORE_SETTINGS)


@pytest_asyncio.fixture
async def client(
    gateway: InMemoryOrderGateway,
    catalog: InMemoryCatalogStore,
    settings_store: InMemorySettingsStore,
) -> AsyncGenerator[AsyncClient, None]:
    """API client with the stores replaced by in-memory fakes."""
    app.dependency_overrides[get_order_gateway] = lambda: gateway
    app.dependency_overrides[get_catalog_store] = lambda: catalog
    app.dependency_overrides[get_settings_store] = lambda: settings_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session
    await engine.dispose()
