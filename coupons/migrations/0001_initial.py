import django.db.models.functions.datetime
import django.utils.timezone
from django.db import migrations, models

import coupons.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50, unique=True)),
                ("discount_type", models.CharField(max_length=20)),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("max_redemptions", models.IntegerField(blank=True, null=True)),
                ("redeemed_count", models.IntegerField(db_default=0, default=0)),
                ("expiry_date", models.DateTimeField()),
                ("minimum_order_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("applicable_products", coupons.fields.IntegerArrayField(blank=True, default=list)),
                ("is_active", models.BooleanField(db_default=True, default=True)),
                ("user_specific", models.BooleanField(db_default=False, default=False)),
                ("created_at", models.DateTimeField(db_default=django.db.models.functions.datetime.Now(), default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(db_default=django.db.models.functions.datetime.Now(), default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "coupons",
            },
        ),
        migrations.CreateModel(
            name="CouponUser",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("external_id", models.CharField(max_length=255)),
            ],
            options={
                "db_table": "coupon_users",
            },
        ),
        migrations.CreateModel(
            name="CouponRedemption",
            fields=[
                ("id", models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_id", models.IntegerField()),
                ("redeemed_at", models.DateTimeField(db_default=django.db.models.functions.datetime.Now(), default=django.utils.timezone.now)),
                (
                    "coupon",
                    models.ForeignKey(
                        on_delete=models.DB_CASCADE,
                        related_name="redemptions",
                        to="coupons.coupon",
                    ),
                ),
                (
                    "coupon_user",
                    models.ForeignKey(
                        on_delete=models.DO_NOTHING,
                        related_name="redemptions",
                        to="coupons.couponuser",
                    ),
                ),
            ],
            options={
                "db_table": "coupon_redemptions",
            },
        ),
    ]
