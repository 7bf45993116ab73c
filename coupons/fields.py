from django.db import models

from .arrays import decode_int_array, encode_int_array


class IntegerArrayField(models.Field):
    """
    Ordered list of integers. Stored as integer[] on PostgreSQL, where the
    driver hands lists back and forth, and as "{1,2,3}" text elsewhere.
    """

    description = "List of integers"

    def db_type(self, connection):
        if connection.vendor == "postgresql":
            return "integer[]"
        return "text"

    def from_db_value(self, value, expression, connection):
        if value is None:
            return value
        return self.to_python(value)

    def to_python(self, value):
        if value is None:
            return value
        if isinstance(value, str):
            return decode_int_array(value)
        return [int(v) for v in value]

    def get_prep_value(self, value):
        if value is None:
            return value
        return [int(v) for v in value]

    def get_db_prep_value(self, value, connection, prepared=False):
        if not prepared:
            value = self.get_prep_value(value)
        if value is None or connection.vendor == "postgresql":
            return value
        return encode_int_array(value)

    def value_to_string(self, obj):
        return encode_int_array(self.value_from_object(obj) or [])
