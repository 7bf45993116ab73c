from rest_framework import serializers

from .models import Coupon


class CreateCouponSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=Coupon.CODE_MAX)
    discount_type = serializers.CharField(max_length=20)
    value = serializers.DecimalField(max_digits=10, decimal_places=2)
    max_redemptions = serializers.IntegerField(required=False, allow_null=True)
    # parsed by Coupon.from_request
    expiry_date = serializers.CharField()
    minimum_order_value = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    applicable_products = serializers.ListField(
        child=serializers.IntegerField(), default=list
    )
    is_active = serializers.BooleanField(default=True)
    user_specific = serializers.BooleanField(default=False)


class CouponSerializer(serializers.ModelSerializer):
    applicable_products = serializers.ListField(child=serializers.IntegerField())

    class Meta:
        model = Coupon
        fields = [
            "id",
            "code",
            "discount_type",
            "value",
            "minimum_order_value",
            "max_redemptions",
            "redeemed_count",
            "expiry_date",
            "applicable_products",
            "created_at",
            "updated_at",
            "is_active",
            "user_specific",
        ]
