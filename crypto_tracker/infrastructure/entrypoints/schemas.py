"""
Pydantic schemas for the REST API and the API Gateway handler.

Field names are snake_case in Python and camelCase on the wire. Response
models are built straight from domain dataclasses (from_attributes=True).
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from crypto_tracker.domain.entities.enrollment import EnrollmentStatus
from crypto_tracker.domain.entities.recommendation import RecommendationType

# Prices go out as JSON numbers, not strings.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

PHONE_PATTERN = r"^\+[1-9]\d{6,14}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── Requests ────────────────────────────────────────────────────


class SubscribeRequest(CamelModel):
    phone_number: str = Field(..., pattern=PHONE_PATTERN, description="E.164 phone number")
    name: Optional[str] = Field(default=None, max_length=100)


class AuthRequest(CamelModel):
    """Body shared by every /auth endpoint; each one reads the fields it needs."""

    phone_number: str = Field(..., min_length=1)
    password: Optional[str] = None
    name: Optional[str] = None
    verification_code: Optional[str] = None
    cognito_user_id: Optional[str] = None
    selected_coins: Optional[list[str]] = None


# ── Responses ───────────────────────────────────────────────────


class SubscriptionResponse(CamelModel):
    phone_number: str
    message: str
    subscribed_at: datetime


class SubscriberSchema(CamelModel):
    phone_number: str
    name: Optional[str] = None
    subscribed_at: Optional[datetime] = None
    cognito_user_id: Optional[str] = None
    selected_coins: list[str] = Field(default_factory=list)


class AuthResponse(CamelModel):
    success: bool
    message: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    cognito_user_id: Optional[str] = None
    subscriber: Optional[SubscriberSchema] = None
    requires_verification: bool = False


class CoinInfoSchema(CamelModel):
    symbol: str
    name: str
    display_name: str


class PriceResponse(CamelModel):
    symbol: str
    currency: str
    spot_price: Optional[Price] = None
    buy_price: Optional[Price] = None
    sell_price: Optional[Price] = None
    timestamp: Optional[datetime] = None


class PricePointSchema(CamelModel):
    spot_price: Optional[Price] = None
    buy_price: Optional[Price] = None
    sell_price: Optional[Price] = None
    timestamp: datetime


class PriceHistoryResponse(CamelModel):
    symbol: str
    currency: str
    history: list[PricePointSchema]
    total_records: int


class TrackingStatusResponse(CamelModel):
    tracked_symbols: list[str]
    total_tracked: int
    timestamp: datetime


class SymbolActionResponse(CamelModel):
    message: str
    symbol: str
    timestamp: datetime


class EnrollmentResponse(CamelModel):
    symbol: str
    currency: str
    enrolled_at: datetime
    status: EnrollmentStatus
    recommendation_available: bool
    recommendation_available_at: datetime
    days_until_recommendation: int


class SentimentSummarySchema(CamelModel):
    overall_sentiment: str
    positive_score: float
    negative_score: float
    neutral_score: float
    tweets_analyzed: int


class TrendSchema(CamelModel):
    current_price: Optional[Price] = None
    seven_day_moving_average: Optional[Price] = None
    trending_upwards: bool
    percent_above_average: float


class RecommendationResponse(CamelModel):
    symbol: str
    currency: str
    recommendation: RecommendationType
    reasoning: str
    sentiment: SentimentSummarySchema
    trend: TrendSchema
    timestamp: datetime


class HealthResponse(CamelModel):
    status: str
    service: str
    timestamp: datetime
