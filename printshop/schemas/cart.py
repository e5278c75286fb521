"""Cart schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from printshop.schemas.catalog import MaterialCategory


class CartLine(BaseModel):
    """A priced product configuration in a shopper's cart."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    session_id: str | None = None
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    selected_material: str = "standard"
    selected_size: str = "small"
    selected_colors: list[str] = Field(default_factory=list)
    customization_details: str | None = None
    unit_price: Decimal = Field(ge=0)

    @field_validator("selected_colors", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        return [] if v is None else v

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class AddCartItemRequest(BaseModel):
    """Shopper configuration to add; the price is computed server-side."""

    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    material: MaterialCategory = "standard"
    size: str = "small"
    colors: list[str | None] = Field(
        default_factory=list,
        description="Color name per slot, in slot order; null for an empty slot",
    )
    customization_text: str | None = None


class UpdateQuantityRequest(BaseModel):
    """New quantity; zero or less removes the line."""

    quantity: int


class CartView(BaseModel):
    """Cart contents with totals."""

    session_id: str
    items: list[CartLine] = Field(default_factory=list)
    item_count: int = 0
    subtotal: Decimal = Decimal("0")
