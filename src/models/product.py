# src/models/product.py

"""Product record and its derived stock status."""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


_INT_PREFIX_RE = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def to_int(value: Any) -> int:
    """Leniently coerce form or CSV input to an int.

    Reads the leading integer of a string (``"12 pcs"`` -> 12,
    ``"3.7"`` -> 3). Anything unparseable becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _INT_PREFIX_RE.match(str(value or "").strip())
    return int(match.group(0)) if match else 0


def to_float(value: Any) -> float:
    """Leniently coerce form or CSV input to a float; unparseable -> 0.0."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else 0.0
    match = _FLOAT_PREFIX_RE.match(str(value or "").strip())
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


class StockStatus(Enum):
    """Stock level bucket relative to a product's minimum-stock threshold."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def classify(cls, quantity: int, min_stock: int) -> "StockStatus":
        """Bucket *quantity* against *min_stock*.

        ``low`` at or below the threshold, ``medium`` up to twice the
        threshold, ``high`` above that.
        """
        if quantity <= min_stock:
            return cls.LOW
        if quantity <= min_stock * 2:
            return cls.MEDIUM
        return cls.HIGH


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="milliseconds")


@dataclass
class Product:
    """A single inventory line."""

    id: int
    name: str
    sku: str
    category: str = ""
    quantity: int = 0
    price: float = 0.0
    min_stock: int = 0
    description: str = ""
    created_at: str = field(default_factory=_now_iso)

    @property
    def line_value(self) -> float:
        """Quantity times unit price."""
        return self.quantity * self.price

    @property
    def status(self) -> StockStatus:
        return StockStatus.classify(self.quantity, self.min_stock)

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the persisted key layout."""
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "category": self.category,
            "quantity": self.quantity,
            "price": self.price,
            "minStock": self.min_stock,
            "description": self.description,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Rebuild a product from its persisted form.

        Missing keys fall back to empty / zero values.
        """
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            sku=str(data.get("sku") or ""),
            category=str(data.get("category") or ""),
            quantity=to_int(data.get("quantity")),
            price=to_float(data.get("price")),
            min_stock=to_int(data.get("minStock")),
            description=str(data.get("description") or ""),
            created_at=str(data.get("createdAt") or _now_iso()),
        )
