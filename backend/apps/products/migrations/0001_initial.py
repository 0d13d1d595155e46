import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("thumbnail", models.TextField(blank=True, default="")),
                ("code", models.CharField(max_length=64, unique=True)),
                ("stock", models.PositiveIntegerField(default=0)),
                ("owner", models.CharField(default="admin", max_length=254)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["title"], name="product_title_idx"),
                    models.Index(fields=["owner"], name="product_owner_idx"),
                ],
            },
        ),
    ]
