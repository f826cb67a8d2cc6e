"""
Cart API Pydantic Models

Request bodies for cart endpoints. Fields are declared as Any so pydantic
does not coerce them (JSON true would otherwise become quantity 1). The cart
manager classifies bad values as InvalidQuantity / InvalidSKU (400). Only a
missing field or a non-object body is rejected here, with 422.
"""
from typing import Any

from pydantic import BaseModel


class AddCartItemRequest(BaseModel):
    sku: Any
    quantity: Any


class UpdateCartItemRequest(BaseModel):
    quantity: Any
