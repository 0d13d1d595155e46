import unittest
import uuid
from decimal import Decimal
from types import SimpleNamespace

from apps.carts.mappers import CartMapper


class StubItems:
    def __init__(self, items):
        self._items = items

    def all(self):
        return list(self._items)


def make_product(title, price):
    return SimpleNamespace(
        id=uuid.uuid4(),
        title=title,
        description=f"{title} description",
        price=Decimal(price),
        thumbnail=f"{title.lower()}.png",
        code=title.upper(),
        stock=10,
        owner="admin",
    )


def make_cart(*lines):
    items = [
        SimpleNamespace(product=product, product_id=product.id, quantity=qty)
        for product, qty in lines
    ]
    return SimpleNamespace(id=uuid.uuid4(), cart_products=StubItems(items))


class CartMapperTests(unittest.TestCase):
    def setUp(self):
        self.widget = make_product("Widget", "12.50")
        self.gadget = make_product("Gadget", "3.20")
        self.cart = make_cart((self.widget, 2), (self.gadget, 3))
        self.mapper = CartMapper()

    def test_detail_dto_carries_full_product_fields(self):
        dto = self.mapper.to_detail_dto(self.cart)
        self.assertEqual(dto.id, str(self.cart.id))
        first = dto.products[0]
        self.assertEqual(first.id, str(self.widget.id))
        self.assertEqual(first.title, "Widget")
        self.assertEqual(first.price, "12.50")
        self.assertEqual(first.code, "WIDGET")
        self.assertEqual(first.quantity, 2)

    def test_summary_dto_has_only_id_and_quantity(self):
        dto = self.mapper.to_summary_dto(self.cart)
        self.assertEqual(
            [(p.id, p.quantity) for p in dto.products],
            [(str(self.widget.id), 2), (str(self.gadget.id), 3)],
        )
        self.assertFalse(hasattr(dto.products[0], "price"))

    def test_empty_dto(self):
        dto = self.mapper.to_empty_dto(self.cart)
        self.assertEqual(dto.products, [])

    def test_total_uses_product_prices(self):
        self.assertEqual(self.mapper.total(self.cart), Decimal("34.60"))

    def test_total_of_empty_cart_is_zero(self):
        self.assertEqual(self.mapper.total(make_cart()), Decimal("0.00"))
