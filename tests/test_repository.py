from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, OperationalError, connection

from coupons.exceptions import CouponConflict, CouponNotFound, StorageError
from coupons.models import Coupon, CouponRedemption, CouponUser
from coupons.repository import SCHEMA_MODELS, CouponRepository, get_repository

pytestmark = pytest.mark.django_db

TABLES = {"coupons", "coupon_users", "coupon_redemptions"}


def make_coupon(code="10OFF", **overrides):
    data = {
        "code": code,
        "discount_type": "percentage",
        "value": Decimal("10"),
        "max_redemptions": 5,
        "expiry_date": "Mon Jan 2 15:04:05 MST 2030",
        "minimum_order_value": Decimal("0"),
        "applicable_products": [1, 2, 3],
        "is_active": True,
        "user_specific": False,
    }
    data.update(overrides)
    return Coupon.from_request(data)


def test_create_then_get():
    repository = CouponRepository()
    created = repository.create(make_coupon())
    assert created.id > 0

    fetched = repository.get_by_id(created.id)
    assert fetched.code == "10OFF"
    assert fetched.discount_type == "percentage"
    assert fetched.value == Decimal("10")
    assert fetched.minimum_order_value == Decimal("0")
    assert fetched.max_redemptions == 5
    assert fetched.applicable_products == [1, 2, 3]
    assert fetched.is_active is True
    assert fetched.user_specific is False
    assert fetched.redeemed_count == 0


def test_empty_product_list_round_trips():
    repository = CouponRepository()
    created = repository.create(make_coupon(applicable_products=[]))
    assert repository.get_by_id(created.id).applicable_products == []


def test_duplicate_code_conflicts():
    repository = CouponRepository()
    repository.create(make_coupon("SAME"))
    with pytest.raises(CouponConflict):
        repository.create(make_coupon("SAME"))
    assert Coupon.objects.filter(code="SAME").count() == 1


def test_missing_coupon():
    with pytest.raises(CouponNotFound) as excinfo:
        CouponRepository().get_by_id(999999)
    assert excinfo.value.message == "Coupon not found"


def test_update_and_delete_are_not_implemented():
    repository = CouponRepository()
    coupon = repository.create(make_coupon())
    with pytest.raises(NotImplementedError):
        repository.update(coupon)
    with pytest.raises(NotImplementedError):
        repository.delete(coupon.id)
    assert Coupon.objects.filter(pk=coupon.id).exists()


def test_initialize_is_idempotent():
    repository = CouponRepository()
    repository.initialize()
    repository.initialize()
    tables = repository.connection.introspection.table_names()
    assert {"coupons", "coupon_users", "coupon_redemptions"} <= set(tables)


def test_get_repository_uses_setting(settings):
    settings.COUPON_REPOSITORY = "coupons.repository.CouponRepository"
    assert isinstance(get_repository(), CouponRepository)



def test_close_delegates_to_connection():
    repository = CouponRepository()
    with mock.patch.object(repository.connection, "close") as close:
        repository.close()
    close.assert_called_once_with()


def test_connect_opens_connection():
    repository = CouponRepository()
    repository.connect()
    assert repository.connection.connection is not None


def test_connect_failure_is_storage_error():
    repository = CouponRepository()
    failure = OperationalError("could not connect to server")
    with mock.patch.object(repository.connection, "ensure_connection", side_effect=failure):
        with pytest.raises(StorageError, match="could not connect"):
            repository.connect()


def test_initialize_wraps_creation_failure():
    repository = CouponRepository()
    editor = mock.MagicMock()
    editor.__enter__.return_value.create_model.side_effect = DatabaseError("permission denied")
    with mock.patch.object(repository.connection.introspection, "table_names", return_value=[]), mock.patch.object(
        repository.connection, "schema_editor", return_value=editor
    ):
        with pytest.raises(StorageError, match="Error creating coupons table: permission denied"):
            repository.initialize()


def test_deleting_coupon_in_sql_cascades_to_redemptions():
    coupon = CouponRepository().create(make_coupon("CASCADE"))
    user = CouponUser.objects.create(external_id="user-1")
    CouponRedemption.objects.create(coupon=coupon, coupon_user=user, order_id=42)

    with connection.cursor() as cursor:
        cursor.execute("DELETE FROM coupons WHERE id = %s", [coupon.id])

    assert not CouponRedemption.objects.exists()
    assert CouponUser.objects.filter(pk=user.pk).exists()


def test_columns_have_database_defaults():
    with connection.cursor() as cursor:
        cursor.execute(
            "INSERT INTO coupons (code, discount_type, value, expiry_date, applicable_products)"
            " VALUES (%s, %s, %s, %s, %s)",
            ["RAW", "percentage", "5.00", "2030-01-02 15:04:05", "{}"],
        )

    coupon = Coupon.objects.get(code="RAW")
    assert coupon.redeemed_count == 0
    assert coupon.is_active is True
    assert coupon.user_specific is False
    assert coupon.created_at is not None
    assert coupon.updated_at is not None
    assert coupon.applicable_products == []


@pytest.mark.django_db(transaction=True)
def test_initialize_creates_missing_tables():
    repository = CouponRepository()
    introspection = repository.connection.introspection
    with repository.connection.schema_editor() as editor:
        for model in reversed(SCHEMA_MODELS):
            editor.delete_model(model)
    assert not TABLES & set(introspection.table_names())

    repository.initialize()

    assert TABLES <= set(introspection.table_names())
    with repository.connection.cursor() as cursor:
        constraints = introspection.get_constraints(cursor, "coupon_redemptions")
    foreign_keys = {
        c["columns"][0]: c["foreign_key"] for c in constraints.values() if c["foreign_key"]
    }
    assert foreign_keys == {
        "coupon_id": ("coupons", "id"),
        "coupon_user_id": ("coupon_users", "id"),
    }

    coupon = repository.create(make_coupon("FRESH"))
    user = CouponUser.objects.create(external_id="user-2")
    CouponRedemption.objects.create(coupon=coupon, coupon_user=user, order_id=7)
    with repository.connection.cursor() as cursor:
        cursor.execute("DELETE FROM coupons WHERE id = %s", [coupon.id])
    assert not CouponRedemption.objects.exists()
