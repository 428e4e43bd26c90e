"""
Infrastructure adapter: market analysis AWS Lambda (boto3 invoke) → IMarketAnalysisProvider.

The function answers with an API Gateway envelope whose "body" is a JSON
string holding {sentiment, emoji, analysis_reasoning}.
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from crypto_tracker.domain.entities.sentiment import MarketAnalysis
from crypto_tracker.domain.ports.market_analysis_port import IMarketAnalysisProvider

logger = logging.getLogger(__name__)


class LambdaMarketAnalysisClient(IMarketAnalysisProvider):
    def __init__(self, function_name: str, region: str | None = None, client: Any = None) -> None:
        self._function_name = function_name
        self._client = client or boto3.client("lambda", region_name=region)

    def get_market_analysis(self, symbol: str = "BTC") -> MarketAnalysis:
        logger.info("Invoking analysis function %s for %s", self._function_name, symbol)
        try:
            response = self._client.invoke(
                FunctionName=self._function_name,
                Payload=json.dumps({"symbol": symbol}).encode("utf-8"),
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error invoking analysis function: %s", exc)
            return MarketAnalysis.unavailable()

        if response.get("FunctionError"):
            logger.error("Analysis function returned error: %s", response["FunctionError"])
            return MarketAnalysis.unavailable()

        try:
            envelope = json.loads(response["Payload"].read())
            body = envelope.get("body")
            if not body:
                logger.warning("No body in analysis response")
                return MarketAnalysis.unavailable()
            analysis = json.loads(body)
            return MarketAnalysis(
                sentiment=analysis.get("sentiment") or "unknown",
                emoji=analysis.get("emoji") or "",
                analysis_reasoning=analysis.get("analysis_reasoning") or "",
            )
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.error("Unreadable analysis response: %s", exc)
            return MarketAnalysis.unavailable()
