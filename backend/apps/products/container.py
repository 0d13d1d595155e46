from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.core.cache import cache

from .repositories import ProductRepository
from .services import ProductService


def build_product_service(*, disable_cache: Optional[bool] = None) -> ProductService:
    if disable_cache is None:
        disable_cache = not getattr(settings, "PRODUCT_CACHE_ENABLED", True)
    return ProductService(
        products=ProductRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
    )
