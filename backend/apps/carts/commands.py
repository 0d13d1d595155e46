import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import InvalidCartItemsError, InvalidQuantityError

PRODUCT_KEYS = ("product", "productId", "product_id", "_id", "id")


def normalize_product_id(value: Any) -> str:
    """Canonical UUID text when ``value`` parses as one, else ``str(value)``."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return str(value)


def coerce_quantity(raw: Any) -> int:
    """Return ``raw`` as a positive int or raise ``InvalidQuantityError``."""
    if isinstance(raw, bool) or raw is None:
        raise InvalidQuantityError(f"Invalid quantity: {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise InvalidQuantityError(f"Invalid quantity: {raw!r}")
    try:
        qty = int(raw)
    except (ValueError, TypeError):
        raise InvalidQuantityError(f"Invalid quantity: {raw!r}") from None
    if qty < 1:
        raise InvalidQuantityError(f"Quantity must be at least 1, got {qty}")
    return qty


@dataclass
class CartItemCommand:
    product_id: str
    quantity: int

    @staticmethod
    def _product_id(raw: Dict[str, Any]) -> Optional[str]:
        for key in PRODUCT_KEYS:
            value = raw.get(key)
            if isinstance(value, dict):
                # populated product object
                value = value.get("_id") or value.get("id")
            if value not in (None, ""):
                return normalize_product_id(value)
        return None

    @staticmethod
    def from_raw(raw: Any) -> Optional["CartItemCommand"]:
        if not isinstance(raw, dict):
            return None
        pid = CartItemCommand._product_id(raw)
        if pid is None:
            return None
        qty = coerce_quantity(raw.get("quantity", 1))
        return CartItemCommand(product_id=pid, quantity=qty)


@dataclass
class CartReplaceCommand:
    cart_id: str
    items: List[CartItemCommand] = field(default_factory=list)
    skipped: int = 0

    @staticmethod
    def from_raw(cart_id: str, raw_items: Any) -> "CartReplaceCommand":
        if not isinstance(raw_items, (list, tuple)):
            raise InvalidCartItemsError(
                f"Cart items must be a list, received {type(raw_items).__name__}"
            )
        merged: Dict[str, CartItemCommand] = {}
        skipped = 0
        for raw in raw_items:
            cmd = CartItemCommand.from_raw(raw)
            if cmd is None:
                skipped += 1
                continue
            if cmd.product_id in merged:
                merged[cmd.product_id].quantity += cmd.quantity
            else:
                merged[cmd.product_id] = cmd
        return CartReplaceCommand(
            cart_id=cart_id, items=list(merged.values()), skipped=skipped
        )
