"""
Composition Root shared by the FastAPI app and the Lambda handlers.

Every adapter and service is built lazily on first use and then reused for
the life of the process (one warm Lambda container or one uvicorn worker).
"""

from functools import cached_property, lru_cache

from crypto_tracker.application.services.enrollment_service import EnrollmentService
from crypto_tracker.application.services.notification_service import NotificationService
from crypto_tracker.application.services.price_history_service import PriceHistoryService
from crypto_tracker.application.services.price_tracker import PriceTrackingService
from crypto_tracker.application.services.sentiment_service import SentimentAnalysisService
from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.application.use_cases.get_price import GetPriceUseCase
from crypto_tracker.application.use_cases.get_recommendation import GetRecommendationUseCase
from crypto_tracker.application.use_cases.sign_in import SignInUseCase
from crypto_tracker.application.use_cases.update_selected_coins import UpdateSelectedCoinsUseCase
from crypto_tracker.core.config import Settings, settings
from crypto_tracker.infrastructure.analysis.lambda_analysis_client import LambdaMarketAnalysisClient
from crypto_tracker.infrastructure.auth.cognito_identity_provider import CognitoIdentityProvider
from crypto_tracker.infrastructure.auth.cognito_validator import CognitoTokenValidator
from crypto_tracker.infrastructure.exchange.coinbase_adapter import CoinbasePriceQuoteProvider
from crypto_tracker.infrastructure.messaging.vonage_adapter import VonageWhatsAppSender
from crypto_tracker.infrastructure.persistence.enrollment_repository import DynamoDBEnrollmentRepository
from crypto_tracker.infrastructure.persistence.price_history_repository import (
    DynamoDBPriceHistoryRepository,
)
from crypto_tracker.infrastructure.persistence.s3_subscriber_store import S3SubscriberStore
from crypto_tracker.infrastructure.sentiment.comprehend_adapter import ComprehendSentimentAnalyzer
from crypto_tracker.infrastructure.social.twitter_adapter import TwitterSocialSearch


class Container:
    def __init__(self, config: Settings = settings) -> None:
        self._config = config

    # ── Adapters ────────────────────────────────────────────────

    @cached_property
    def quote_provider(self) -> CoinbasePriceQuoteProvider:
        return CoinbasePriceQuoteProvider(
            base_url=self._config.coinbase_base_url,
            timeout=self._config.coinbase_timeout_seconds,
        )

    @cached_property
    def identity_provider(self) -> CognitoIdentityProvider:
        return CognitoIdentityProvider(
            user_pool_id=self._config.cognito_user_pool_id,
            client_id=self._config.cognito_client_id,
            region=self._config.aws_region,
        )

    @cached_property
    def token_validator(self) -> CognitoTokenValidator:
        return CognitoTokenValidator(
            user_pool_id=self._config.cognito_user_pool_id,
            client_id=self._config.cognito_client_id,
            region=self._config.aws_region,
        )

    # ── Services ────────────────────────────────────────────────

    @cached_property
    def price_tracker(self) -> PriceTrackingService:
        return PriceTrackingService(
            self.quote_provider,
            max_history_records=self._config.tracker_history_max_records,
        )

    @cached_property
    def price_history(self) -> PriceHistoryService:
        return PriceHistoryService(
            DynamoDBPriceHistoryRepository(),
            self.quote_provider,
            retention_days=self._config.price_history_retention_days,
            moving_average_days=self._config.moving_average_days,
        )

    @cached_property
    def enrollments(self) -> EnrollmentService:
        return EnrollmentService(
            DynamoDBEnrollmentRepository(),
            minimum_days=self._config.minimum_enrollment_days,
        )

    @cached_property
    def sentiment(self) -> SentimentAnalysisService:
        return SentimentAnalysisService(
            TwitterSocialSearch(
                bearer_token=self._config.twitter_bearer_token,
                search_url=self._config.twitter_search_url,
                max_results=self._config.twitter_max_results,
                include_retweets=self._config.twitter_include_retweets,
            ),
            ComprehendSentimentAnalyzer(region=self._config.aws_region),
            min_texts=self._config.sentiment_min_tweets,
            positive_threshold=self._config.sentiment_positive_threshold,
        )

    @cached_property
    def subscriptions(self) -> SubscriptionService:
        return SubscriptionService(
            S3SubscriberStore(
                bucket=self._config.subscribers_bucket,
                region=self._config.aws_region,
            )
        )

    @cached_property
    def notifications(self) -> NotificationService:
        return NotificationService(
            subscriptions=self.subscriptions,
            provider=self.quote_provider,
            sender=VonageWhatsAppSender(
                api_key=self._config.vonage_api_key,
                api_secret=self._config.vonage_api_secret,
                from_number=self._config.vonage_from_number,
                api_url=self._config.vonage_api_url,
            ),
            analysis=LambdaMarketAnalysisClient(
                function_name=self._config.analysis_function_name,
                region=self._config.aws_region,
            ),
            symbols=self._config.digest_symbols,
            price_history=self.price_history,
        )

    # ── Use cases ───────────────────────────────────────────────

    @cached_property
    def get_price(self) -> GetPriceUseCase:
        return GetPriceUseCase(self.quote_provider)

    @cached_property
    def get_recommendation(self) -> GetRecommendationUseCase:
        return GetRecommendationUseCase(self.enrollments, self.price_history, self.sentiment)

    @cached_property
    def sign_in(self) -> SignInUseCase:
        return SignInUseCase(self.identity_provider, self.subscriptions)

    @cached_property
    def update_selected_coins(self) -> UpdateSelectedCoinsUseCase:
        return UpdateSelectedCoinsUseCase(self.subscriptions)


@lru_cache(maxsize=1)
def get_container() -> Container:
    return Container()
