"""
storefront/schemas/cart.py - Pydantic models for the storefront cart.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Display name")
    price: float = Field(..., ge=0, description="Unit price in major units (rupees)")
    image: str = Field(..., description="Image URL")
    quantity: int = Field(1, ge=1, description="Quantity of the product in the cart")
    addedAt: str = Field(..., description="ISO timestamp, set once when the line is created")
    size: Optional[str] = None
    color: Optional[str] = None

    class Config:
        extra = "allow"  # product attributes the page passed along stay on the line

    @property
    def key(self) -> Tuple[str, Optional[str], Optional[str]]:
        """Uniqueness key within a cart."""
        return self.id, self.size, self.color

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
