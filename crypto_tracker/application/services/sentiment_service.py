"""
Application service: social-media sentiment for a coin.

Business decisions owned here:
  - Texts shorter than MIN_TEXT_LENGTH are ignored, longer ones are cut at
    MAX_TEXT_LENGTH before analysis.
  - Scores are averaged over every analyzed text; the overall label comes
    from domain.analytics.overall_sentiment.
"""

import logging

from crypto_tracker.domain.analytics import overall_sentiment
from crypto_tracker.domain.entities.sentiment import SentimentResult, TweetSentiment
from crypto_tracker.domain.ports.sentiment_port import ISentimentAnalyzer
from crypto_tracker.domain.ports.social_search_port import ISocialSearch

logger = logging.getLogger(__name__)


class SentimentAnalysisService:
    MIN_TEXT_LENGTH: int = 10
    MAX_TEXT_LENGTH: int = 5000
    DISPLAY_TEXT_LENGTH: int = 100

    def __init__(
        self,
        social_search: ISocialSearch,
        analyzer: ISentimentAnalyzer,
        min_texts: int = 10,
        positive_threshold: float = 0.5,
    ) -> None:
        self._social_search = social_search
        self._analyzer = analyzer
        self._min_texts = min_texts
        self._positive_threshold = positive_threshold

    def analyze_sentiment(self, symbol: str) -> SentimentResult:
        """Search recent posts about *symbol* and aggregate their sentiment.

        Returns an UNKNOWN result when no usable text is found.
        """
        texts = self._social_search.get_post_texts(symbol)
        if not texts:
            logger.warning("No posts found for %s", symbol)
            return SentimentResult.unknown()

        valid = [
            text[: self.MAX_TEXT_LENGTH]
            for text in texts
            if text and len(text) >= self.MIN_TEXT_LENGTH
        ]
        if len(valid) < self._min_texts:
            logger.warning(
                "Only %d usable posts for %s (minimum %d)", len(valid), symbol, self._min_texts
            )
        if not valid:
            return SentimentResult.unknown()

        results = self._analyzer.detect_sentiment(valid)
        if not results:
            return SentimentResult.unknown()

        positive = sum(r.score.positive for r in results) / len(results)
        negative = sum(r.score.negative for r in results) / len(results)
        neutral = sum(r.score.neutral for r in results) / len(results)
        mixed = sum(r.score.mixed for r in results) / len(results)

        individual = [
            TweetSentiment(
                tweet_id=str(r.index),
                text=self._display_text(valid[r.index]),
                sentiment=r.sentiment,
                confidence=r.confidence,
            )
            for r in results
        ]
        overall = overall_sentiment(positive, negative, neutral, mixed, self._positive_threshold)
        logger.info(
            "Sentiment for %s: %s (positive=%.2f, negative=%.2f, texts=%d)",
            symbol, overall, positive, negative, len(results),
        )
        return SentimentResult(
            overall_sentiment=overall,
            positive_score=positive,
            negative_score=negative,
            neutral_score=neutral,
            mixed_score=mixed,
            tweets_analyzed=len(results),
            individual_results=individual,
        )

    def is_positive_sentiment(self, symbol: str) -> bool:
        return self.analyze_sentiment(symbol).is_positive

    def _display_text(self, text: str) -> str:
        if len(text) <= self.DISPLAY_TEXT_LENGTH:
            return text
        return text[: self.DISPLAY_TEXT_LENGTH] + "..."
