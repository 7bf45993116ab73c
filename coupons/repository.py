"""
Data access for coupons.

The views never talk to the ORM directly; they ask get_repository() for the
repository named by the COUPON_REPOSITORY setting and go through it.
"""
import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, connections, transaction
from django.utils.module_loading import import_string

from .exceptions import CouponConflict, CouponNotFound, StorageError
from .models import Coupon, CouponRedemption, CouponUser

logger = logging.getLogger(__name__)

# creation order matters: coupon_redemptions references the other two
SCHEMA_MODELS = (Coupon, CouponUser, CouponRedemption)


class CouponRepository:
    def __init__(self, using="default"):
        self.using = using

    @property
    def connection(self):
        return connections[self.using]

    def connect(self):
        try:
            self.connection.ensure_connection()
        except DatabaseError as exc:
            raise StorageError(f"cannot connect to database: {exc}") from exc

    def close(self):
        self.connection.close()

    def initialize(self):
        """Create the coupons, coupon_users and coupon_redemptions tables if missing."""
        try:
            existing = set(self.connection.introspection.table_names())
        except DatabaseError as exc:
            raise StorageError(f"Error reading schema: {exc}") from exc

        for model in SCHEMA_MODELS:
            table = model._meta.db_table
            if table in existing:
                continue
            logger.info("Creating table %s", table)
            try:
                with self.connection.schema_editor() as editor:
                    editor.create_model(model)
            except DatabaseError as exc:
                raise StorageError(f"Error creating {table} table: {exc}") from exc

    def get_by_id(self, coupon_id):
        try:
            return Coupon.objects.using(self.using).get(pk=coupon_id)
        except Coupon.DoesNotExist:
            raise CouponNotFound("Coupon not found")
        except (DatabaseError, ValueError) as exc:
            raise StorageError(str(exc)) from exc

    def create(self, coupon):
        try:
            with transaction.atomic(using=self.using):
                coupon.save(using=self.using, force_insert=True)
        except IntegrityError as exc:
            raise CouponConflict(f'coupon with code "{coupon.code}" already exists') from exc
        except DatabaseError as exc:
            raise StorageError(str(exc)) from exc
        logger.info("Created coupon %s with id %s", coupon.code, coupon.pk)
        return coupon

    def update(self, coupon):
        raise NotImplementedError("updating coupons is not implemented")

    def delete(self, coupon_id):
        raise NotImplementedError("deleting coupons is not implemented")


def get_repository():
    return import_string(settings.COUPON_REPOSITORY)()
