from django.apps import AppConfig


class CouponsConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "coupons"
