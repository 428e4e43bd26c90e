"""
Trend, sentiment and recommendation rules.

Elementary arithmetic over small in-memory lists plus the BUY / SELL / HOLD
decision table. Decimal arithmetic uses ROUND_HALF_UP to match the rounding of
the stored history.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from crypto_tracker.domain.entities.price import TrendData
from crypto_tracker.domain.entities.recommendation import RecommendationType
from crypto_tracker.domain.entities.sentiment import (
    MIXED,
    NEGATIVE,
    NEUTRAL,
    POSITIVE,
    SentimentResult,
)

_HUNDRED = Decimal(100)
_TWO_PLACES = Decimal("0.01")
_FOUR_PLACES = Decimal("0.0001")
MIXED_THRESHOLD = 0.3


def percent_change(previous: Optional[Decimal], current: Optional[Decimal]) -> Optional[Decimal]:
    """Day-over-day change of *current* against *previous*, in percent (2 places).

    Returns None when either price is missing or *previous* is zero.
    """
    if previous is None or current is None or previous == 0:
        return None
    ratio = ((current - previous) / previous).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)
    return (ratio * _HUNDRED).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def moving_average(values: Iterable[Optional[Decimal]]) -> Optional[Decimal]:
    """Arithmetic mean of the non-null *values*, rounded to 2 places."""
    present = [value for value in values if value is not None]
    if not present:
        return None
    total = sum(present, Decimal(0))
    return (total / len(present)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def percent_above(current: Decimal, average: Decimal) -> float:
    ratio = ((current - average) / average).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)
    return float(ratio * _HUNDRED)


def build_trend(current: Optional[Decimal], average: Optional[Decimal]) -> TrendData:
    """Compare the current sell price with its moving average."""
    if current is None or average is None or average == 0:
        return TrendData(
            current_price=current,
            seven_day_moving_average=average,
            trending_upwards=False,
            percent_above_average=0.0,
        )
    return TrendData(
        current_price=current,
        seven_day_moving_average=average,
        trending_upwards=current > average,
        percent_above_average=percent_above(current, average),
    )


def overall_sentiment(
    positive: float,
    negative: float,
    neutral: float,
    mixed: float,
    positive_threshold: float = 0.5,
) -> str:
    if positive >= positive_threshold and positive > negative:
        return POSITIVE
    if negative > positive and negative > neutral:
        return NEGATIVE
    if mixed > MIXED_THRESHOLD:
        return MIXED
    return NEUTRAL


def decide_recommendation(sentiment_positive: bool, trending_up: bool) -> RecommendationType:
    """Decision table.

    positive + up   -> BUY
    positive + down -> HOLD
    not positive    -> SELL
    """
    if sentiment_positive and trending_up:
        return RecommendationType.BUY
    if not sentiment_positive:
        return RecommendationType.SELL
    return RecommendationType.HOLD


def build_reasoning(
    sentiment: SentimentResult,
    trend: TrendData,
    recommendation: RecommendationType,
) -> str:
    label = sentiment.overall_sentiment.lower()

    if recommendation == RecommendationType.BUY:
        reasoning = "Positive market sentiment detected"
        if sentiment.tweets_analyzed > 0:
            reasoning += (
                f" ({sentiment.positive_score * 100:.0f}% positive "
                f"from {sentiment.tweets_analyzed} tweets)"
            )
        reasoning += " with upward price trend"
        if trend.percent_above_average != 0:
            reasoning += f" ({trend.percent_above_average:.2f}% above 7-day moving average)"
        return reasoning + "."

    if recommendation == RecommendationType.SELL:
        reasoning = "Market sentiment is not positive"
        if sentiment.tweets_analyzed > 0:
            reasoning += (
                f" ({label} sentiment with {sentiment.negative_score * 100:.0f}% negative "
                f"from {sentiment.tweets_analyzed} tweets)"
            )
        return reasoning + ". Consider selling or avoiding new positions."

    reasoning = "Mixed signals detected. "
    if sentiment.is_positive:
        reasoning += "Sentiment is positive but "
    else:
        reasoning += f"Sentiment is {label} and "
    if trend.trending_upwards:
        reasoning += "price is trending upwards. "
    else:
        reasoning += "price is below 7-day moving average. "
    return reasoning + "Consider holding current position."
