"""
Application configuration.

Loads settings from environment variables and the .env file.
Every table name, endpoint, credential and tuning knob lives here so adapters
and services receive plain values through the composition root.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DIGEST_SYMBOLS = ["BTC", "ETH", "SOL", "ADA", "BNB", "XRP", "LINK", "ALGO"]


class Settings(BaseSettings):
    """Settings for the price tracker, the notification job and the API.

    Attributes:
        service_name: Name reported by the health check.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        aws_region: Region used for every boto3 / PynamoDB client.
        dynamodb_endpoint: Optional endpoint override (e.g. DynamoDB Local).
        enrollment_table: DynamoDB table holding symbol enrollments.
        price_history_table: DynamoDB table holding price samples (TTL enabled).
        subscribers_bucket: S3 bucket storing subscribers.json.
        secrets_arn: Optional Secrets Manager ARN loaded into the environment
            at Lambda cold start.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    service_name: str = "coinbase-price-tracker"
    version: str = "1.0.0"
    log_level: str = "INFO"

    aws_region: str = "us-east-1"
    dynamodb_endpoint: Optional[str] = None
    enrollment_table: str = "symbol-enrollments"
    price_history_table: str = "price-history"
    subscribers_bucket: str = "crypto-tracker-subscribers"
    secrets_arn: Optional[str] = None

    cognito_user_pool_id: str = ""
    cognito_client_id: str = ""

    coinbase_base_url: str = "https://api.coinbase.com/v2"
    coinbase_timeout_seconds: float = 10.0

    vonage_api_key: str = ""
    vonage_api_secret: str = ""
    vonage_from_number: str = "14157386102"
    vonage_api_url: str = "https://messages-sandbox.nexmo.com/v1/messages"

    twitter_bearer_token: str = ""
    twitter_search_url: str = "https://api.twitter.com/2/tweets/search/recent"
    twitter_max_results: int = 100
    twitter_include_retweets: bool = False

    analysis_function_name: str = "crypto-analysis-dev"

    tracker_history_max_records: int = 100
    price_history_retention_days: int = 30
    moving_average_days: int = 7
    minimum_enrollment_days: int = 7
    sentiment_min_tweets: int = 10
    sentiment_positive_threshold: float = 0.5

    digest_symbols: list[str] = DEFAULT_DIGEST_SYMBOLS


settings = Settings()
