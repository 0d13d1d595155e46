from __future__ import annotations

from apps.products.repositories import ProductRepository

from .repositories import CartProductRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(
        carts=CartRepository(),
        cart_products=CartProductRepository(),
        products=ProductRepository(),
    )
