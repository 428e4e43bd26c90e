"""
Infrastructure adapter: Amazon Comprehend batch_detect_sentiment → ISentimentAnalyzer.
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from crypto_tracker.domain.entities.sentiment import SentimentScore, TextSentiment
from crypto_tracker.domain.ports.sentiment_port import ISentimentAnalyzer

logger = logging.getLogger(__name__)


class ComprehendSentimentAnalyzer(ISentimentAnalyzer):
    MAX_BATCH_SIZE: int = 25
    LANGUAGE_CODE: str = "en"

    def __init__(self, region: str | None = None, client: Any = None) -> None:
        self._client = client or boto3.client("comprehend", region_name=region)

    def detect_sentiment(self, texts: list[str]) -> list[TextSentiment]:
        """Analyze *texts* in batches; a failed batch is logged and skipped.

        Result indexes refer to positions in *texts*.
        """
        results: list[TextSentiment] = []
        for start in range(0, len(texts), self.MAX_BATCH_SIZE):
            batch = texts[start:start + self.MAX_BATCH_SIZE]
            try:
                response = self._client.batch_detect_sentiment(
                    TextList=batch,
                    LanguageCode=self.LANGUAGE_CODE,
                )
            except (ClientError, BotoCoreError) as exc:
                logger.error("Sentiment batch starting at %d failed: %s", start, exc)
                continue

            for item in response.get("ResultList", []):
                score = item.get("SentimentScore", {})
                results.append(
                    TextSentiment(
                        index=start + item["Index"],
                        sentiment=item.get("Sentiment", ""),
                        score=SentimentScore(
                            positive=score.get("Positive", 0.0),
                            negative=score.get("Negative", 0.0),
                            neutral=score.get("Neutral", 0.0),
                            mixed=score.get("Mixed", 0.0),
                        ),
                    )
                )
            for error in response.get("ErrorList", []):
                logger.warning(
                    "Sentiment failed for text %d: %s",
                    start + error.get("Index", 0), error.get("ErrorMessage"),
                )
        return results
