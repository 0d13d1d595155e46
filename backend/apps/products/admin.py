from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "code", "price", "stock", "owner")
    search_fields = ("title", "code", "owner")
