from typing import Any, Dict

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.renderers import JSONRenderer, TemplateHTMLRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.codes import ErrorCode
from apps.api.error_info import generate_cart_id_error, generate_properties_error
from apps.api.exceptions import CustomError, database_error
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from apps.products.container import build_product_service
from apps.users.models import ROLE_PREMIUM
from .container import build_cart_service
from .mappers import CartMapper
from .models import Cart
from .permissions import IsAuthenticatedToAdd
from .serializers import (
    CartDetailSerializer,
    CartQuantitySerializer,
    CartRenderSerializer,
    CartReplaceSerializer,
    CartSummarySerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

CART_TEMPLATE = "carts/carts.html"

CART_ID_PARAM = OpenApiParameter("cid", str, OpenApiParameter.PATH)
PRODUCT_ID_PARAM = OpenApiParameter("pid", str, OpenApiParameter.PATH)


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _require_cart_id(cid: Any, *, name: str, message: str) -> None:
    if not _is_valid_id(cid):
        raise CustomError(
            name=name,
            message=message,
            cause=generate_cart_id_error(cid),
            code=ErrorCode.INVALID_IDS_ERROR,
        )


def _require_ids(cid: Any, pid: Any, *, name: str, message: str) -> None:
    if not (_is_valid_id(cid) and _is_valid_id(pid)):
        raise CustomError(
            name=name,
            message=message,
            cause=generate_properties_error(cid=cid, pid=pid),
            code=ErrorCode.INVALID_IDS_ERROR,
        )


class RenderedCartMixin:
    """GET and POST render ``carts.html``; other methods answer JSON."""

    rendered_methods = ("GET", "POST")
    mapper = CartMapper()

    def get_renderers(self):
        request = getattr(self, "request", None)
        method = getattr(request, "method", None)
        if method in self.rendered_methods:
            return [TemplateHTMLRenderer(), JSONRenderer()]
        return super().get_renderers()

    def render_cart(self, cart: Cart, projection: Dict[str, Any]) -> Response:
        context: Dict[str, Any] = {
            "cart": projection,
            "cartId": str(cart.id),
            "total": str(self.mapper.total(cart)),
        }
        return Response(context, template_name=CART_TEMPLATE)


class CartListView(APIView):
    service = build_cart_service()
    mapper = CartMapper()
    log = logger.bind(view="CartListView")

    @extend_schema(
        summary="Create cart",
        description="Creates a new, empty cart.",
        request=None,
        responses={
            201: CartDetailSerializer,
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        try:
            cart = self.service.create_cart()
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning("Cart creation failed", error=exc)
            raise database_error(exc) from exc
        self.log.info("Cart created via API", cart_id=cart.id)
        dto = self.mapper.to_empty_dto(cart)
        return Response(CartDetailSerializer(dto).data, status=status.HTTP_201_CREATED)


class CartDetailView(RenderedCartMixin, APIView):
    rendered_methods = ("GET",)
    service = build_cart_service()
    log = logger.bind(view="CartDetailView")

    @extend_schema(
        summary="Get cart",
        description=(
            "Renders the cart page with full product data and the total price. "
            "Send `Accept: application/json` to receive the template context as JSON."
        ),
        parameters=[CART_ID_PARAM],
        responses={
            200: CartRenderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, cid=None):
        try:
            _require_cart_id(
                cid, name="Invalid ID Error", message="Error trying to get cart by Id"
            )
            cart = self.service.get_cart_by_id(cid)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning("Cart lookup failed", cart_id=cid, error=exc)
            raise database_error(exc) from exc
        dto = self.mapper.to_detail_dto(cart)
        return self.render_cart(cart, CartDetailSerializer(dto).data)

    @extend_schema(
        summary="Replace cart products",
        description="Replaces every line of the cart with the given products.",
        parameters=[CART_ID_PARAM],
        request=CartReplaceSerializer,
        responses={
            200: CartDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, cid=None):
        try:
            _require_cart_id(
                cid, name="Invalid Id Error", message="Error trying to update Cart"
            )
            items = request.data.get("products") if hasattr(request.data, "get") else None
            cart = self.service.update_cart(cid, items)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning("Cart replace failed", cart_id=cid, error=exc)
            raise database_error(exc) from exc
        self.log.info("Cart replaced via API", cart_id=cart.id)
        dto = self.mapper.to_detail_dto(cart)
        return Response(CartDetailSerializer(dto).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Clear cart",
        description="Removes every product from the cart.",
        parameters=[CART_ID_PARAM],
        responses={
            200: CartDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, cid=None):
        try:
            _require_cart_id(
                cid,
                name="Invalid Id Error",
                message="Error trying to delete all Products Cart",
            )
            cart = self.service.delete_all_products_from_cart(cid)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning("Cart clear failed", cart_id=cid, error=exc)
            raise database_error(exc) from exc
        self.log.info("Cart cleared via API", cart_id=cart.id)
        dto = self.mapper.to_empty_dto(cart)
        return Response(CartDetailSerializer(dto).data, status=status.HTTP_200_OK)


class CartProductView(RenderedCartMixin, APIView):
    rendered_methods = ("POST",)
    permission_classes = [IsAuthenticatedToAdd]
    service = build_cart_service()
    product_service = build_product_service()
    log = logger.bind(view="CartProductView")

    @extend_schema(
        summary="Add product to cart",
        description=(
            "Adds one unit of the product to the cart and renders the cart page. "
            "Requires authentication; premium users cannot add products they own."
        ),
        parameters=[CART_ID_PARAM, PRODUCT_ID_PARAM],
        request=None,
        responses={
            200: CartRenderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, cid=None, pid=None):
        try:
            _require_ids(
                cid,
                pid,
                name="Invalid Ids Error",
                message="Error trying to add Product to cart",
            )
            product = self.product_service.get_product_by_id(pid)
            user = request.user
            email = getattr(user, "email", None)
            if getattr(user, "role", None) == ROLE_PREMIUM and product.owner == email:
                self.log.warning(
                    "Premium user tried to add own product",
                    cart_id=cid,
                    product_id=pid,
                    user_id=getattr(user, "id", None),
                )
                raise CustomError(
                    name="Unauthorized Error",
                    message="You cannot add your own product to the cart",
                    cause=f"Product owner: {product.owner}, User email: {email}",
                    code=ErrorCode.UNAUTHORIZED_ERROR,
                )
            cart = self.service.add_product_to_cart(cid, pid)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning(
                "Add to cart failed", cart_id=cid, product_id=pid, error=exc
            )
            raise database_error(exc, str(exc)) from exc
        self.log.info("Product added via API", cart_id=cart.id, product_id=pid)
        dto = self.mapper.to_summary_dto(cart)
        return self.render_cart(cart, CartSummarySerializer(dto).data)

    @extend_schema(
        summary="Update product quantity",
        parameters=[CART_ID_PARAM, PRODUCT_ID_PARAM],
        request=CartQuantitySerializer,
        responses={
            200: CartSummarySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, cid=None, pid=None):
        try:
            _require_ids(
                cid,
                pid,
                name="Invalid IDS Error",
                message="Error trying to update Product quantity in cart",
            )
            quantity = request.data.get("quantity") if hasattr(request.data, "get") else None
            cart = self.service.update_product_quantity_in_cart(cid, pid, quantity)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning(
                "Quantity update failed", cart_id=cid, product_id=pid, error=exc
            )
            raise database_error(exc) from exc
        dto = self.mapper.to_summary_dto(cart)
        return Response(CartSummarySerializer(dto).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Remove product from cart",
        parameters=[CART_ID_PARAM, PRODUCT_ID_PARAM],
        responses={
            200: CartSummarySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, cid=None, pid=None):
        try:
            _require_ids(
                cid,
                pid,
                name="Invalid IDS Error",
                message="Error trying to delete Product from Cart",
            )
            cart = self.service.delete_product_from_cart(cid, pid)
        except CustomError:
            raise
        except Exception as exc:
            self.log.warning(
                "Remove from cart failed", cart_id=cid, product_id=pid, error=exc
            )
            raise database_error(exc) from exc
        dto = self.mapper.to_summary_dto(cart)
        return Response(CartSummarySerializer(dto).data, status=status.HTTP_200_OK)
