from __future__ import annotations

from typing import Any

from django.db import transaction

from apps.common import get_logger
from apps.products.services import ProductNotFoundError
from .commands import CartReplaceCommand, coerce_quantity
from .exceptions import CartNotFoundError, CartProductNotFoundError
from .models import Cart
from .protocols import (
    CartProductRepositoryProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_products: CartProductRepositoryProtocol,
        products: ProductRepositoryProtocol,
    ):
        self.carts = carts
        self.cart_products = cart_products
        self.products = products
        self.logger = logger.bind(service="CartService")

    def create_cart(self) -> Cart:
        with transaction.atomic():
            cart = self.carts.create()
        self.logger.info("Cart created", cart_id=cart.id)
        return cart

    def get_cart_by_id(self, cart_id: Any) -> Cart:
        self.logger.debug("Fetching cart", cart_id=cart_id)
        return self._require_cart(cart_id)

    def add_product_to_cart(self, cart_id: Any, product_id: Any) -> Cart:
        self.logger.info("Adding product to cart", cart_id=cart_id, product_id=product_id)
        with transaction.atomic():
            cart = self._require_cart(cart_id)
            product = self._require_product(product_id)
            item = self.cart_products.get_for_cart_product(cart.id, product.id)
            if item:
                self.cart_products.update(item, quantity=item.quantity + 1)
            else:
                self.cart_products.create(cart=cart, product=product, quantity=1)
        return self._refresh(cart)

    def delete_product_from_cart(self, cart_id: Any, product_id: Any) -> Cart:
        self.logger.info(
            "Removing product from cart", cart_id=cart_id, product_id=product_id
        )
        with transaction.atomic():
            cart = self._require_cart(cart_id)
            item = self._require_item(cart, product_id)
            self.cart_products.delete(item)
        return self._refresh(cart)

    def update_cart(self, cart_id: Any, items: Any) -> Cart:
        """Replace every line item of the cart with ``items``.

        Entries whose product does not exist are skipped.
        """
        command = CartReplaceCommand.from_raw(str(cart_id), items)
        self.logger.info(
            "Replacing cart items",
            cart_id=cart_id,
            items=len(command.items),
            skipped=command.skipped,
        )
        with transaction.atomic():
            cart = self._require_cart(cart_id)
            self.cart_products.delete_for_cart(cart)
            for item in command.items:
                product = self.products.get_by_id(item.product_id)
                if not product:
                    self.logger.warning(
                        "Skipping unknown product during cart replace",
                        cart_id=cart.id,
                        product_id=item.product_id,
                    )
                    continue
                self.cart_products.create(
                    cart=cart, product=product, quantity=item.quantity
                )
        return self._refresh(cart)

    def update_product_quantity_in_cart(
        self, cart_id: Any, product_id: Any, quantity: Any
    ) -> Cart:
        qty = coerce_quantity(quantity)
        self.logger.info(
            "Updating product quantity",
            cart_id=cart_id,
            product_id=product_id,
            quantity=qty,
        )
        with transaction.atomic():
            cart = self._require_cart(cart_id)
            item = self._require_item(cart, product_id)
            self.cart_products.update(item, quantity=qty)
        return self._refresh(cart)

    def delete_all_products_from_cart(self, cart_id: Any) -> Cart:
        self.logger.info("Clearing cart", cart_id=cart_id)
        with transaction.atomic():
            cart = self._require_cart(cart_id)
            self.cart_products.delete_for_cart(cart)
        return self._refresh(cart)

    def _require_cart(self, cart_id: Any) -> Cart:
        cart = self.carts.get_by_id(cart_id)
        if not cart:
            self.logger.info("Cart not found", cart_id=cart_id)
            raise CartNotFoundError(f"Cart {cart_id} not found")
        return cart

    def _require_product(self, product_id: Any):
        product = self.products.get_by_id(product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            raise ProductNotFoundError(f"Product {product_id} not found")
        return product

    def _require_item(self, cart: Cart, product_id: Any):
        item = self.cart_products.get_for_cart_product(cart.id, product_id)
        if not item:
            self.logger.info(
                "Product not in cart", cart_id=cart.id, product_id=product_id
            )
            raise CartProductNotFoundError(
                f"Product {product_id} is not in cart {cart.id}"
            )
        return item

    def _refresh(self, cart: Cart) -> Cart:
        return self.carts.get(id=cart.id) or cart
