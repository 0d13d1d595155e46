from django.contrib.auth.models import AbstractUser
from django.db import models

ROLE_USER = "user"
ROLE_PREMIUM = "premium"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_USER, "User"),
    (ROLE_PREMIUM, "Premium"),
    (ROLE_ADMIN, "Admin"),
]


class User(AbstractUser):
    # Product ownership is recorded by email, so it has to be unique.
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    def __str__(self):
        return self.username
