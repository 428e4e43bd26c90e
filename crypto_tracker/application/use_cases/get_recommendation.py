"""
Use-case: BUY / SELL / HOLD recommendation for an enrolled symbol.

Flow: enrollment check -> waiting period check -> record price ->
sentiment -> trend -> decision table -> reasoning.
"""

import logging

from crypto_tracker.application.services.enrollment_service import EnrollmentService
from crypto_tracker.application.services.price_history_service import PriceHistoryService
from crypto_tracker.application.services.sentiment_service import SentimentAnalysisService
from crypto_tracker.domain.analytics import build_reasoning, decide_recommendation
from crypto_tracker.domain.clock import Clock, utc_now
from crypto_tracker.domain.entities.recommendation import Recommendation, SentimentSummary
from crypto_tracker.domain.errors import RecommendationNotAvailableError, SymbolNotEnrolledError
from crypto_tracker.domain.symbols import base_symbol, normalize_symbol, split_symbol

logger = logging.getLogger(__name__)


class GetRecommendationUseCase:
    def __init__(
        self,
        enrollments: EnrollmentService,
        price_history: PriceHistoryService,
        sentiment: SentimentAnalysisService,
        clock: Clock = utc_now,
    ) -> None:
        self._enrollments = enrollments
        self._price_history = price_history
        self._sentiment = sentiment
        self._clock = clock

    def execute(self, symbol: str) -> Recommendation:
        """
        Raises:
            SymbolNotEnrolledError: *symbol* has no active enrollment.
            RecommendationNotAvailableError: still inside the waiting period.
            ExchangeApiError: the current price cannot be fetched.
        """
        normalized = normalize_symbol(symbol)
        if not self._enrollments.is_enrolled(normalized):
            raise SymbolNotEnrolledError(symbol.strip().upper())

        if not self._enrollments.is_recommendation_available(normalized):
            raise RecommendationNotAvailableError(
                symbol=normalized,
                available_at=self._enrollments.get_recommendation_available_date(normalized),
                days_remaining=self._enrollments.get_days_until_recommendation(normalized),
            )

        self._price_history.record_price(normalized)

        sentiment = self._sentiment.analyze_sentiment(base_symbol(normalized))
        trend = self._price_history.analyze_trend(normalized)
        decision = decide_recommendation(sentiment.is_positive, trend.trending_upwards)
        logger.info(
            "Recommendation for %s: %s (sentiment=%s, trending_up=%s)",
            normalized, decision.value, sentiment.overall_sentiment, trend.trending_upwards,
        )

        base, currency = split_symbol(normalized)
        return Recommendation(
            symbol=base,
            currency=currency,
            recommendation=decision,
            reasoning=build_reasoning(sentiment, trend, decision),
            sentiment=SentimentSummary(
                overall_sentiment=sentiment.overall_sentiment,
                positive_score=sentiment.positive_score,
                negative_score=sentiment.negative_score,
                neutral_score=sentiment.neutral_score,
                tweets_analyzed=sentiment.tweets_analyzed,
            ),
            trend=trend,
            timestamp=self._clock(),
        )
