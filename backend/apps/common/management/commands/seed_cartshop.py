from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.carts.models import Cart, CartProduct
from apps.products.models import DEFAULT_OWNER, Product
from apps.users.models import ROLE_ADMIN, ROLE_PREMIUM, ROLE_USER, User

PRODUCTS = [
    (
        "BAG-001",
        "Foldsack No. 1 Backpack",
        "109.95",
        "Everyday pack with a padded sleeve for laptops up to 15 inches.",
        "https://example.com/img/backpack.png",
        25,
        DEFAULT_OWNER,
    ),
    (
        "TSH-002",
        "Slim Fit T-Shirt",
        "22.30",
        "Slim-fitting style with contrast raglan long sleeve.",
        "https://example.com/img/tshirt.png",
        80,
        DEFAULT_OWNER,
    ),
    (
        "JKT-003",
        "Cotton Jacket",
        "55.99",
        "Outerwear jacket for spring, autumn and winter.",
        "https://example.com/img/jacket.png",
        12,
        "seller@cartshop.dev",
    ),
    (
        "SSD-004",
        "SSD PLUS 1TB Internal SSD",
        "109.00",
        "SATA III 6 Gb/s internal drive.",
        "https://example.com/img/ssd.png",
        40,
        "seller@cartshop.dev",
    ),
    (
        "MON-005",
        "21.5 inch Full HD IPS Monitor",
        "599.00",
        "Ultra-thin widescreen IPS display.",
        "https://example.com/img/monitor.png",
        6,
        DEFAULT_OWNER,
    ),
]

USERS = [
    {
        "username": "admin",
        "email": "admin@cartshop.dev",
        "password": "AdminPass123!",
        "role": ROLE_ADMIN,
        "is_staff": True,
        "is_superuser": True,
    },
    {
        "username": "seller",
        "email": "seller@cartshop.dev",
        "password": "SellerPass123!",
        "role": ROLE_PREMIUM,
    },
    {
        "username": "buyer",
        "email": "buyer@cartshop.dev",
        "password": "BuyerPass123!",
        "role": ROLE_USER,
    },
]


class Command(BaseCommand):
    help = "Seed products, demo users and an empty cart."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            CartProduct.objects.all().delete()
            Cart.objects.all().delete()
            Product.objects.all().delete()
            User.objects.filter(username__in=[u["username"] for u in USERS]).delete()

        self.stdout.write("Seeding products...")
        for code, title, price, desc, thumbnail, stock, owner in PRODUCTS:
            Product.objects.update_or_create(
                code=code,
                defaults=dict(
                    title=title,
                    price=Decimal(price),
                    description=desc,
                    thumbnail=thumbnail,
                    stock=stock,
                    owner=owner,
                ),
            )

        self.stdout.write("Seeding users...")
        for payload in USERS:
            attrs = dict(payload)
            raw_password = attrs.pop("password")
            username = attrs.pop("username")
            user, _ = User.objects.update_or_create(username=username, defaults=attrs)
            user.set_password(raw_password)
            user.save()

        if not Cart.objects.exists():
            cart = Cart.objects.create()
            self.stdout.write(f"Created cart {cart.id}")

        self.stdout.write(self.style.SUCCESS("Cartshop seed completed."))
