from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .container import build_product_service
from .models import Product


@receiver(post_save, sender=Product)
@receiver(post_delete, sender=Product)
def drop_cached_product(sender, instance, **kwargs):
    # Cached records must match the stored owner and price.
    build_product_service().invalidate(instance.id)
