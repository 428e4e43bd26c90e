"""
Domain entities for BUY / SELL / HOLD recommendations.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from crypto_tracker.domain.entities.price import TrendData


class RecommendationType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class SentimentSummary:
    overall_sentiment: str
    positive_score: float
    negative_score: float
    neutral_score: float
    tweets_analyzed: int


@dataclass(frozen=True)
class Recommendation:
    symbol: str
    currency: str
    recommendation: RecommendationType
    reasoning: str
    sentiment: SentimentSummary
    trend: TrendData
    timestamp: datetime
