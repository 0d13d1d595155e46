from .dtos import ProductDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=str(product.id),
            title=product.title,
            description=product.description,
            price=str(product.price),
            thumbnail=product.thumbnail,
            code=product.code,
            stock=product.stock,
            owner=product.owner,
        )
