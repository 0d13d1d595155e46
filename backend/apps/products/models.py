import uuid

from django.db import models

DEFAULT_OWNER = "admin"


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    thumbnail = models.TextField(blank=True, default="")
    code = models.CharField(max_length=64, unique=True)
    stock = models.PositiveIntegerField(default=0)
    # Email of the premium user who listed the product, or "admin".
    owner = models.CharField(max_length=254, default=DEFAULT_OWNER)

    def __str__(self):
        return self.title

    class Meta:
        indexes = [
            models.Index(fields=["title"], name="product_title_idx"),
            models.Index(fields=["owner"], name="product_owner_idx"),
        ]
