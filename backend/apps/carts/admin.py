from django.contrib import admin

from .models import Cart, CartProduct


class CartProductInline(admin.TabularInline):
    model = CartProduct
    extra = 0
    raw_id_fields = ("product",)


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at")
    inlines = [CartProductInline]
