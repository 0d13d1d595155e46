from __future__ import annotations

import uuid
from typing import Any, Optional

from apps.common import get_logger
from .models import Product
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="products", layer="service")


class ProductNotFoundError(LookupError):
    """Raised when a product id does not match any stored product."""


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:detail"

    def _cache_key(self, product_id: Any) -> Optional[str]:
        if self.disable_cache:
            return None
        try:
            return f"{self._cache_prefix}:{uuid.UUID(str(product_id))}"
        except (ValueError, TypeError):
            return None

    def get_product_by_id(self, product_id: Any) -> Product:
        """Return the product record, read through the cache when enabled."""
        key = self._cache_key(product_id)
        self.logger.debug("Fetching product", product_id=product_id, cache_key=key)
        if key is not None:
            cached = self.cache.get(key)
            if cached is not None:
                self.logger.debug("Product cache hit", cache_key=key)
                return cached
        product = self.products.get_by_id(product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
            raise ProductNotFoundError(f"Product {product_id} not found")
        if key is not None:
            self.cache.set(key, product)
        return product

    def invalidate(self, product_id: Any) -> None:
        key = self._cache_key(product_id)
        if key is not None:
            self.cache.delete(key)
            self.logger.debug("Product cache invalidated", cache_key=key)
