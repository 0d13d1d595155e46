from apps.common.repository import GenericRepository
from .models import Cart, CartProduct


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related("cart_products__product")


class CartProductRepository(GenericRepository[CartProduct]):
    def __init__(self):
        super().__init__(CartProduct)

    def _base_queryset(self):
        return self.model.objects.select_related("product")

    def delete_for_cart(self, cart: Cart):
        self.model.objects.filter(cart=cart).delete()

    def get_for_cart_product(self, cart_id, product_id):
        return self.find(cart_id=cart_id, product_id=product_id)
