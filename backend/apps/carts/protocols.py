from __future__ import annotations

from typing import Any, Optional, Protocol, TYPE_CHECKING

from .models import Cart, CartProduct

if TYPE_CHECKING:
    from apps.products.models import Product


class CartRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Cart]:
        ...

    def get_by_id(self, raw_id: Any) -> Optional[Cart]:
        ...

    def create(self, **data) -> Cart:
        ...


class CartProductRepositoryProtocol(Protocol):
    def create(self, **data) -> CartProduct:
        ...

    def update(self, item: CartProduct, **data) -> CartProduct:
        ...

    def delete(self, item: CartProduct) -> None:
        ...

    def delete_for_cart(self, cart: Cart) -> None:
        ...

    def get_for_cart_product(self, cart_id: Any, product_id: Any) -> Optional[CartProduct]:
        ...


class ProductRepositoryProtocol(Protocol):
    def get_by_id(self, raw_id: Any) -> Optional["Product"]:
        ...
