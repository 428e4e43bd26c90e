"""
Infrastructure adapter: Twitter API v2 recent search → ISocialSearch.

Without a bearer token the adapter is unavailable and every search returns an
empty list; API failures are logged and also yield an empty list.
"""

import logging
import re
from typing import Optional

import httpx

from crypto_tracker.domain.ports.social_search_port import ISocialSearch
from crypto_tracker.domain.symbols import base_symbol

logger = logging.getLogger(__name__)

SYMBOL_HASHTAGS = {
    "BTC": "#Bitcoin OR $BTC",
    "ETH": "#Ethereum OR $ETH",
    "SOL": "#Solana OR $SOL",
    "DOGE": "#Dogecoin OR $DOGE",
    "XRP": "#XRP OR $XRP",
    "ADA": "#Cardano OR $ADA",
    "AVAX": "#Avalanche OR $AVAX",
    "DOT": "#Polkadot OR $DOT",
    "MATIC": "#Polygon OR $MATIC",
    "LINK": "#Chainlink OR $LINK",
}

_URL_PATTERN = re.compile(r"https?://\S+")
_MENTION_PATTERN = re.compile(r"@\w+")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# recent search accepts 10..100 results per page
_MIN_RESULTS, _MAX_RESULTS = 10, 100


def build_search_query(symbol: str, include_retweets: bool = False) -> str:
    base = base_symbol(symbol)
    query = SYMBOL_HASHTAGS.get(base, f"${base}") + " lang:en"
    if not include_retweets:
        query += " -is:retweet"
    return query


def clean_text(text: str) -> str:
    """Strip URLs, mentions and '#', then collapse whitespace."""
    text = _URL_PATTERN.sub("", text)
    text = _MENTION_PATTERN.sub("", text)
    text = text.replace("#", "")
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


class TwitterSocialSearch(ISocialSearch):
    def __init__(
        self,
        bearer_token: str,
        search_url: str = "https://api.twitter.com/2/tweets/search/recent",
        max_results: int = 100,
        include_retweets: bool = False,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._bearer_token = bearer_token
        self._search_url = search_url
        self._max_results = min(max(max_results, _MIN_RESULTS), _MAX_RESULTS)
        self._include_retweets = include_retweets
        self._client = client or httpx.Client(timeout=10.0)
        if not self.is_available():
            logger.warning("Twitter bearer token not configured; sentiment analysis unavailable")

    def is_available(self) -> bool:
        return bool(self._bearer_token and self._bearer_token.strip())

    def get_post_texts(self, symbol: str) -> list[str]:
        if not self.is_available():
            logger.warning("Twitter client not configured; cannot fetch posts for %s", symbol)
            return []

        query = build_search_query(symbol, self._include_retweets)
        try:
            response = self._client.get(
                self._search_url,
                params={"query": query, "max_results": self._max_results},
                headers={"Authorization": f"Bearer {self._bearer_token}"},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch tweets for %s: %s", base_symbol(symbol), exc)
            return []

        if not isinstance(payload, dict):
            logger.error("Unexpected tweet payload for %s", base_symbol(symbol))
            return []
        tweets = payload.get("data")
        if not isinstance(tweets, list):
            return []

        texts = [
            clean_text(tweet["text"])
            for tweet in tweets
            if isinstance(tweet, dict)
            and isinstance(tweet.get("text"), str)
            and tweet["text"].strip()
        ]
        logger.info("Retrieved %d tweets for %s", len(texts), base_symbol(symbol))
        return texts
