from decimal import Decimal
from typing import Iterable, List, Optional

from apps.products.mappers import ProductMapper
from .dtos import CartDTO, CartItemDTO, CartProductDTO
from .models import Cart, CartProduct

CENTS = Decimal("0.01")


class CartProductMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, cp: CartProduct) -> CartProductDTO:
        product = self.product_mapper.to_dto(cp.product)
        return CartProductDTO(
            id=product.id,
            title=product.title,
            description=product.description,
            price=product.price,
            thumbnail=product.thumbnail,
            code=product.code,
            stock=product.stock,
            quantity=cp.quantity,
        )

    def many_to_dto(self, items: Iterable[CartProduct]) -> List[CartProductDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    """Projects a cart record into the shapes returned by the cart endpoints."""

    def __init__(self, cart_product_mapper: Optional[CartProductMapper] = None) -> None:
        self.cart_product_mapper = cart_product_mapper or CartProductMapper()

    def to_detail_dto(self, cart: Cart) -> CartDTO:
        """Full product fields plus quantity for every line."""
        items = self.cart_product_mapper.many_to_dto(cart.cart_products.all())
        return CartDTO(id=str(cart.id), products=items)

    def to_summary_dto(self, cart: Cart) -> CartDTO:
        """Only the product id and quantity for every line."""
        items = [
            CartItemDTO(id=str(cp.product_id), quantity=cp.quantity)
            for cp in cart.cart_products.all()
        ]
        return CartDTO(id=str(cart.id), products=items)

    def to_empty_dto(self, cart: Cart) -> CartDTO:
        return CartDTO(id=str(cart.id), products=[])

    def total(self, cart: Cart) -> Decimal:
        total = sum(
            (cp.product.price * cp.quantity for cp in cart.cart_products.all()),
            Decimal("0"),
        )
        return Decimal(total).quantize(CENTS)
