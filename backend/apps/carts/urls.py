from django.urls import path

from .views import CartDetailView, CartListView, CartProductView

urlpatterns = [
    path("", CartListView.as_view(), name="api-carts-list"),
    path("<str:cid>/", CartDetailView.as_view(), name="api-carts-detail"),
    path(
        "<str:cid>/products/<str:pid>/",
        CartProductView.as_view(),
        name="api-carts-product",
    ),
]
