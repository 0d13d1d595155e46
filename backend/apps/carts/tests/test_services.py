import unittest
import uuid
from decimal import Decimal
from unittest.mock import patch

from apps.carts.exceptions import (
    CartNotFoundError,
    CartProductNotFoundError,
    InvalidCartItemsError,
    InvalidQuantityError,
)
from apps.carts.services import CartService
from apps.products.services import ProductNotFoundError


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class StubProduct:
    def __init__(self, title: str, price: str):
        self.id = uuid.uuid4()
        self.title = title
        self.price = Decimal(price)


class StubCartProduct:
    def __init__(self, cart, product: StubProduct, quantity: int):
        self.cart = cart
        self.cart_id = cart.id
        self.product = product
        self.product_id = product.id
        self.quantity = quantity


class StubCartProductsManager:
    def __init__(self, cart):
        self._cart = cart

    def all(self):
        return list(self._cart._items)


class StubCart:
    def __init__(self):
        self.id = uuid.uuid4()
        self._items = []
        self.cart_products = StubCartProductsManager(self)


class FakeCartRepository:
    def __init__(self):
        self._storage = {}

    def create(self, **data):
        cart = StubCart()
        self._storage[str(cart.id)] = cart
        return cart

    def get(self, **filters):
        return self._storage.get(str(filters.get("id")))

    def get_by_id(self, raw_id):
        return self.get(id=raw_id)


class FakeCartProductRepository:
    def __init__(self, cart_repository: FakeCartRepository):
        self.cart_repository = cart_repository

    def create(self, **data):
        cart: StubCart = data["cart"]
        item = StubCartProduct(cart, data["product"], data["quantity"])
        cart._items.append(item)
        return item

    def update(self, item: StubCartProduct, **data):
        for key, value in data.items():
            setattr(item, key, value)
        return item

    def delete(self, item: StubCartProduct):
        item.cart._items.remove(item)

    def delete_for_cart(self, cart: StubCart):
        cart._items.clear()

    def get_for_cart_product(self, cart_id, product_id):
        cart = self.cart_repository.get(id=cart_id)
        if not cart:
            return None
        for item in cart._items:
            if str(item.product_id) == str(product_id):
                return item
        return None


class FakeProductRepository:
    def __init__(self, products):
        self._products = {str(p.id): p for p in products}

    def get_by_id(self, raw_id):
        return self._products.get(str(raw_id))


class CartServiceUnitTests(unittest.TestCase):
    def setUp(self):
        self.widget = StubProduct("Widget", "1.00")
        self.gadget = StubProduct("Gadget", "2.00")
        self.cart_repo = FakeCartRepository()
        self.cart_products_repo = FakeCartProductRepository(self.cart_repo)
        self.service = CartService(
            carts=self.cart_repo,
            cart_products=self.cart_products_repo,
            products=FakeProductRepository([self.widget, self.gadget]),
        )
        self.atomic_patcher = patch(
            "apps.carts.services.transaction.atomic", DummyAtomic()
        )
        self.atomic_patcher.start()
        self.cart = self.service.create_cart()
        self.cid = str(self.cart.id)

    def tearDown(self):
        self.atomic_patcher.stop()

    def lines(self, cart):
        return [(item.product.title, item.quantity) for item in cart.cart_products.all()]

    def test_create_cart_starts_empty(self):
        self.assertEqual(self.lines(self.cart), [])

    def test_get_cart_by_id(self):
        self.assertIs(self.service.get_cart_by_id(self.cid), self.cart)

    def test_get_cart_by_id_missing(self):
        with self.assertRaises(CartNotFoundError):
            self.service.get_cart_by_id(str(uuid.uuid4()))

    def test_add_product_appends_then_increments(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        cart = self.service.add_product_to_cart(self.cid, str(self.widget.id))
        cart = self.service.add_product_to_cart(self.cid, str(self.gadget.id))
        self.assertEqual(self.lines(cart), [("Widget", 2), ("Gadget", 1)])

    def test_add_unknown_product_raises(self):
        with self.assertRaises(ProductNotFoundError):
            self.service.add_product_to_cart(self.cid, str(uuid.uuid4()))
        self.assertEqual(self.lines(self.cart), [])

    def test_add_to_missing_cart_raises(self):
        with self.assertRaises(CartNotFoundError):
            self.service.add_product_to_cart(str(uuid.uuid4()), str(self.widget.id))

    def test_delete_product_from_cart(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        self.service.add_product_to_cart(self.cid, str(self.gadget.id))
        cart = self.service.delete_product_from_cart(self.cid, str(self.widget.id))
        self.assertEqual(self.lines(cart), [("Gadget", 1)])

    def test_delete_product_not_in_cart_raises(self):
        with self.assertRaises(CartProductNotFoundError):
            self.service.delete_product_from_cart(self.cid, str(self.widget.id))

    def test_update_cart_replaces_lines_and_skips_unknown_products(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        cart = self.service.update_cart(
            self.cid,
            [
                {"product": str(self.gadget.id), "quantity": 4},
                {"productId": str(uuid.uuid4()), "quantity": 1},
            ],
        )
        self.assertEqual(self.lines(cart), [("Gadget", 4)])

    def test_update_cart_rejects_non_list(self):
        with self.assertRaises(InvalidCartItemsError):
            self.service.update_cart(self.cid, "not-a-list")

    def test_update_product_quantity(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        cart = self.service.update_product_quantity_in_cart(
            self.cid, str(self.widget.id), "7"
        )
        self.assertEqual(self.lines(cart), [("Widget", 7)])

    def test_update_product_quantity_rejects_bad_values(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        with self.assertRaises(InvalidQuantityError):
            self.service.update_product_quantity_in_cart(self.cid, str(self.widget.id), 0)
        self.assertEqual(self.lines(self.cart), [("Widget", 1)])

    def test_update_quantity_of_missing_line_raises(self):
        with self.assertRaises(CartProductNotFoundError):
            self.service.update_product_quantity_in_cart(self.cid, str(self.widget.id), 2)

    def test_delete_all_products(self):
        self.service.add_product_to_cart(self.cid, str(self.widget.id))
        self.service.add_product_to_cart(self.cid, str(self.gadget.id))
        cart = self.service.delete_all_products_from_cart(self.cid)
        self.assertEqual(self.lines(cart), [])
