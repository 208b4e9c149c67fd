"""
Pydantic Schemas for Menu, Cart and Order Data

Shared by the order store, the HTTP API and the client session.
JSON field names are camelCase on the wire (customerName, customerPhone);
Python attributes stay snake_case and both spellings are accepted on input.

No business validation happens here: prices, quantities, totals and phone
numbers are only checked for type shape.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class MenuCategory(str, Enum):
    STARTERS = "Starters"
    HEAVY_SNACKS = "Heavy Snacks"
    RICE_AND_NOODLES = "Rice & Noodles"
    SIDES = "Sides"


class OrderStatus(str, Enum):
    """Order status workflow: new -> completed, never back."""
    NEW = "new"
    COMPLETED = "completed"


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# MENU & CART
# =============================================================================

class MenuItem(CamelModel):
    """A dish on the menu. Reference data, never modified."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., examples=["spring-rolls"])
    name: str = Field(..., examples=["Veg Spring Rolls"])
    description: str = Field(..., examples=["Crispy rolls with cabbage and carrot"])
    price: float = Field(..., examples=[4.5])
    image: str = Field(..., examples=["/images/spring-rolls.jpg"])
    category: MenuCategory


class CartItem(MenuItem):
    """A menu item with the quantity chosen by the customer."""

    quantity: int = Field(..., examples=[2])

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# =============================================================================
# ORDERS
# =============================================================================

class CreateOrderRequest(CamelModel):
    """Request schema for creating a new order."""

    items: List[CartItem]
    customer_name: str = Field(..., examples=["Jo"])
    customer_phone: str = Field(..., examples=["555-0100"])
    total: float = Field(..., examples=[20.0])


class Order(CamelModel):
    """
    A placed order.

    Only ``status`` changes after creation; everything else is fixed at
    the moment the store accepted the order.
    """

    token: str = Field(..., examples=["4821"])
    items: List[CartItem]
    customer_name: str
    customer_phone: str
    total: float
    timestamp: datetime
    status: OrderStatus = OrderStatus.NEW

    @property
    def is_completed(self) -> bool:
        return self.status == OrderStatus.COMPLETED


class CompleteOrderRequest(CamelModel):
    """Token of the order to complete, sent in the body so any string fits."""
    token: str = Field(..., examples=["4821"])


class CompleteOrderResponse(CamelModel):
    """Outcome of marking an order complete. Unknown tokens are not an error."""
    token: str
    found: bool


# =============================================================================
# SYSTEM
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    orders: int
    timestamp: datetime
