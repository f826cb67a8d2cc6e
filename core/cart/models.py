"""Cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List

from core.errors import CorruptEntryError
from core.services.money import line_total as compute_line_total, round_money, to_decimal, to_float


@dataclass
class CartEntry:
    """Single SKU in a user's cart, with the catalog snapshot taken at its last mutation."""
    sku: str
    quantity: int
    unit_price: Decimal
    name: str
    image_url: str
    line_total: Decimal = Decimal("0")

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        self.line_total = to_decimal(self.line_total)

    @classmethod
    def snapshot(cls, sku: str, quantity: int, product) -> "CartEntry":
        """Build a fresh entry from a catalog product, computing the line total."""
        unit_price = to_decimal(product.price)
        return cls(
            sku=sku,
            quantity=quantity,
            unit_price=unit_price,
            name=product.name,
            image_url=product.image_url,
            line_total=compute_line_total(unit_price, quantity),
        )

    def to_payload(self) -> str:
        """Serialize to the hash field value. The SKU is the field name and is not repeated."""
        return json.dumps({
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "name": self.name,
            "image_url": self.image_url,
            "line_total": str(self.line_total),
        })

    @classmethod
    def from_payload(cls, sku: str, payload: str | bytes) -> "CartEntry":
        """
        Decode a stored hash field value.

        Raises:
            CorruptEntryError: payload is not a valid entry
        """
        try:
            data = json.loads(payload)
            if not isinstance(data, dict):
                raise TypeError(f"expected object, got {type(data).__name__}")
            quantity = data["quantity"]
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise ValueError(f"invalid quantity {quantity!r}")
            for text_field in ("name", "image_url"):
                if not isinstance(data[text_field], str):
                    raise TypeError(f"{text_field} must be a string, got {data[text_field]!r}")
            return cls(
                sku=sku,
                quantity=quantity,
                unit_price=to_decimal(data["unit_price"]),
                name=data["name"],
                image_url=data["image_url"],
                line_total=to_decimal(data["line_total"]),
            )
        except (ValueError, KeyError, TypeError, InvalidOperation) as e:
            # json.JSONDecodeError is a ValueError
            raise CorruptEntryError(f"Corrupt cart entry for SKU {sku!r}: {e}") from e

    def to_dict(self) -> dict:
        """API representation (floats at the boundary)."""
        return {
            "sku": self.sku,
            "quantity": self.quantity,
            "price": to_float(self.unit_price),
            "name": self.name,
            "image_url": self.image_url,
            "item_total_price": to_float(self.line_total),
        }


@dataclass
class CartView:
    """Read-side view of a cart: every entry plus aggregates."""
    user_id: int
    entries: List[CartEntry] = field(default_factory=list)
    total_price: Decimal = Decimal("0.00")
    total_items: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @classmethod
    def from_entries(cls, user_id: int, entries: List[CartEntry]) -> "CartView":
        """Aggregate totals from quantity × unit price, not from stored line totals."""
        ordered = sorted(entries, key=lambda entry: entry.sku)
        total_price = Decimal("0")
        total_items = 0
        for entry in ordered:
            total_price += entry.unit_price * entry.quantity
            total_items += entry.quantity
        return cls(
            user_id=user_id,
            entries=ordered,
            total_price=round_money(total_price),
            total_items=total_items,
        )

    def to_dict(self) -> dict:
        return {
            "items": [entry.to_dict() for entry in self.entries],
            "total_price": to_float(self.total_price),
            "total_items": self.total_items,
        }
