from rest_framework import serializers


class CartProductReadSerializer(serializers.Serializer):
    _id = serializers.CharField(source="id")
    title = serializers.CharField()
    description = serializers.CharField()
    price = serializers.CharField()
    thumbnail = serializers.CharField()
    code = serializers.CharField()
    stock = serializers.IntegerField()
    quantity = serializers.IntegerField()


class CartItemReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    quantity = serializers.IntegerField()


class CartDetailSerializer(serializers.Serializer):
    id = serializers.CharField()
    products = CartProductReadSerializer(many=True)


class CartSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    products = CartItemReadSerializer(many=True)


class CartRenderSerializer(serializers.Serializer):
    cart = CartDetailSerializer()
    cartId = serializers.CharField()
    total = serializers.CharField()


# Request bodies below are documentation only; the service normalises them.
class CartItemWriteSerializer(serializers.Serializer):
    product = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class CartReplaceSerializer(serializers.Serializer):
    products = CartItemWriteSerializer(many=True)


class CartQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
