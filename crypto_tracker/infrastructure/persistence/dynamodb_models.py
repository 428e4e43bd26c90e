"""
PynamoDB table models for enrollments and price history.
Table names, region and an optional local endpoint come from Settings.
"""

from decimal import Decimal

from pynamodb.attributes import Attribute, TTLAttribute, UnicodeAttribute, UTCDateTimeAttribute
from pynamodb.constants import NUMBER
from pynamodb.models import Model

from crypto_tracker.core.config import settings


class DecimalAttribute(Attribute[Decimal]):
    """DynamoDB number stored and read back as an exact Decimal."""

    attr_type = NUMBER

    def serialize(self, value: Decimal) -> str:
        return str(value)

    def deserialize(self, value: str) -> Decimal:
        return Decimal(value)


class SymbolEnrollmentModel(Model):
    class Meta:
        table_name = settings.enrollment_table
        region = settings.aws_region
        host = settings.dynamodb_endpoint

    symbol = UnicodeAttribute(hash_key=True)
    enrolled_at = UTCDateTimeAttribute()
    status = UnicodeAttribute()
    updated_at = UTCDateTimeAttribute()


class PriceHistoryModel(Model):
    class Meta:
        table_name = settings.price_history_table
        region = settings.aws_region
        host = settings.dynamodb_endpoint

    symbol = UnicodeAttribute(hash_key=True)
    timestamp = UTCDateTimeAttribute(range_key=True)
    spot_price = DecimalAttribute(null=True)
    buy_price = DecimalAttribute(null=True)
    sell_price = DecimalAttribute(null=True)
    daily_change_percent = DecimalAttribute(null=True)
    ttl = TTLAttribute(null=True)
