from django.conf import settings
from django.urls import include, path


def api_prefix():
    # "/api" + "v1" -> "api/v1/"
    parts = [settings.COUPON_API_BASE_URL.strip("/"), settings.COUPON_API_VERSION.strip("/")]
    return "/".join(p for p in parts if p) + "/"


urlpatterns = [
    path(api_prefix(), include("coupons.urls")),
]
