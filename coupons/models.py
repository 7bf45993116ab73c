from datetime import datetime, timezone as dt_timezone

from django.db import models
from django.db.models.functions import Now
from django.utils import timezone

from .exceptions import InvalidInput
from .fields import IntegerArrayField

# Unix date(1) layout, e.g. "Mon Jan 2 15:04:05 MST 2006"
EXPIRY_DATE_LAYOUT = "Mon Jan 2 15:04:05 MST 2006"
_EXPIRY_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"


def parse_expiry_date(value):
    """
    Parse an expiry date written in EXPIRY_DATE_LAYOUT. The zone abbreviation
    carries no offset information and is read as UTC.
    """
    error = InvalidInput(f'cannot parse expiry_date "{value}" as "{EXPIRY_DATE_LAYOUT}"')
    if not isinstance(value, str):
        raise error

    parts = value.split()
    if len(parts) != 6 or not parts[4].isalpha():
        raise error
    try:
        parsed = datetime.strptime(" ".join(parts[:4] + parts[5:]), _EXPIRY_DATE_FORMAT)
    except ValueError:
        raise error
    return parsed.replace(tzinfo=dt_timezone.utc)


class Coupon(models.Model):
    CODE_MAX = 50

    code = models.CharField(max_length=CODE_MAX, unique=True)
    discount_type = models.CharField(max_length=20)  # free text, e.g. 'percentage'
    value = models.DecimalField(max_digits=10, decimal_places=2)
    max_redemptions = models.IntegerField(null=True, blank=True)
    redeemed_count = models.IntegerField(default=0, db_default=0)
    expiry_date = models.DateTimeField()
    minimum_order_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    applicable_products = IntegerArrayField(default=list, blank=True)
    is_active = models.BooleanField(default=True, db_default=True)
    user_specific = models.BooleanField(default=False, db_default=False)

    created_at = models.DateTimeField(default=timezone.now, db_default=Now())
    # not refreshed on writes
    updated_at = models.DateTimeField(default=timezone.now, db_default=Now())

    class Meta:
        db_table = "coupons"

    def __str__(self):
        return self.code

    @classmethod
    def from_request(cls, data):
        """Build an unsaved coupon from a validated create request."""
        return cls(
            code=data["code"],
            discount_type=data["discount_type"],
            value=data["value"],
            minimum_order_value=data.get("minimum_order_value"),
            max_redemptions=data.get("max_redemptions"),
            expiry_date=parse_expiry_date(data["expiry_date"]),
            applicable_products=list(data.get("applicable_products") or []),
            is_active=data.get("is_active", True),
            user_specific=data.get("user_specific", False),
            created_at=timezone.now(),
        )


class CouponUser(models.Model):
    external_id = models.CharField(max_length=255)

    class Meta:
        db_table = "coupon_users"

    def __str__(self):
        return self.external_id


class CouponRedemption(models.Model):
    coupon = models.ForeignKey("Coupon", on_delete=models.DB_CASCADE, related_name="redemptions")
    coupon_user = models.ForeignKey("CouponUser", on_delete=models.DO_NOTHING, related_name="redemptions")
    order_id = models.IntegerField()
    redeemed_at = models.DateTimeField(default=timezone.now, db_default=Now())

    class Meta:
        db_table = "coupon_redemptions"

    def __str__(self):
        return f"{self.coupon_user_id} redeemed {self.coupon_id} on order {self.order_id}"
