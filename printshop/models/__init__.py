"""SQLAlchemy models for the print shop.

Importing this package registers every table on ``Base.metadata``.
"""

from printshop.models.base import Base, IdMixin, TimestampMixin, new_id
from printshop.models.cart_item import CartItem
from printshop.models.color import Color
from printshop.models.complexity_setting import ComplexitySetting
from printshop.models.material import Material
from printshop.models.order import Order
from printshop.models.product import Product
from printshop.models.setting import Setting

__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "new_id",
    "CartItem",
    "Color",
    "ComplexitySetting",
    "Material",
    "Order",
    "Product",
    "Setting",
]
