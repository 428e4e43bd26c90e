"""
Domain entities for social-media sentiment and market analysis.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Optional

POSITIVE = "POSITIVE"
NEGATIVE = "NEGATIVE"
NEUTRAL = "NEUTRAL"
MIXED = "MIXED"
UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class SentimentScore:
    positive: float
    negative: float
    neutral: float
    mixed: float


@dataclass(frozen=True)
class TextSentiment:
    """Sentiment detected for one text of a batch; index is its batch position."""

    index: int
    sentiment: str
    score: SentimentScore

    @property
    def confidence(self) -> float:
        return {
            POSITIVE: self.score.positive,
            NEGATIVE: self.score.negative,
            NEUTRAL: self.score.neutral,
            MIXED: self.score.mixed,
        }.get(self.sentiment, 0.0)


@dataclass(frozen=True)
class TweetSentiment:
    tweet_id: str
    text: str
    sentiment: str
    confidence: float


@dataclass(frozen=True)
class SentimentResult:
    overall_sentiment: str
    positive_score: float = 0.0
    negative_score: float = 0.0
    neutral_score: float = 0.0
    mixed_score: float = 0.0
    tweets_analyzed: int = 0
    individual_results: list[TweetSentiment] = field(default_factory=list)

    @property
    def is_positive(self) -> bool:
        return self.overall_sentiment == POSITIVE

    @classmethod
    def unknown(cls, individual_results: Optional[list[TweetSentiment]] = None) -> "SentimentResult":
        return cls(overall_sentiment=UNKNOWN, individual_results=individual_results or [])


@dataclass(frozen=True)
class MarketAnalysis:
    """Output of the external market analysis function."""

    sentiment: str
    emoji: str
    analysis_reasoning: str

    @classmethod
    def unavailable(cls) -> "MarketAnalysis":
        return cls(sentiment="unknown", emoji="", analysis_reasoning="Analysis unavailable")
