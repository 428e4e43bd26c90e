"""
Tests for the REST API.

FastAPI routes are exercised with TestClient; every service and use case is
replaced through app.dependency_overrides. Validates status codes, camelCase
bodies and domain error mapping.
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from crypto_tracker.application.services.enrollment_service import EnrollmentService
from crypto_tracker.application.services.price_tracker import PriceTrackingService
from crypto_tracker.application.services.subscription_service import SubscriptionService
from crypto_tracker.application.use_cases.get_price import GetPriceUseCase
from crypto_tracker.application.use_cases.get_recommendation import GetRecommendationUseCase
from crypto_tracker.application.use_cases.sign_in import SignInUseCase
from crypto_tracker.application.use_cases.update_selected_coins import UpdateSelectedCoinsUseCase
from crypto_tracker.domain.entities.enrollment import EnrollmentStatus, EnrollmentView
from crypto_tracker.domain.entities.price import (
    CoinInfo,
    PriceHistory,
    PricePoint,
    PriceQuote,
    TrackingStatus,
    TrendData,
)
from crypto_tracker.domain.entities.recommendation import (
    Recommendation,
    RecommendationType,
    SentimentSummary,
)
from crypto_tracker.domain.entities.subscriber import AuthResult, Subscriber, SubscriptionResult
from crypto_tracker.domain.errors import (
    ExchangeApiError,
    InvalidSymbolError,
    RecommendationNotAvailableError,
    SubscriptionStoreError,
    SymbolNotEnrolledError,
)
from crypto_tracker.domain.ports.identity_port import IIdentityProvider
from crypto_tracker.domain.ports.price_quote_port import IPriceQuoteProvider
from crypto_tracker.domain.ports.token_validator_port import ITokenValidator
from crypto_tracker.infrastructure.entrypoints import dependencies
from crypto_tracker.infrastructure.entrypoints.fastapi_app import create_app
from tests.conftest import FIXED_NOW

PHONE = "+15551234567"


@pytest.fixture
def mocks() -> dict:
    return {
        dependencies.get_price_use_case: MagicMock(spec=GetPriceUseCase),
        dependencies.get_price_tracker: MagicMock(spec=PriceTrackingService),
        dependencies.get_enrollment_service: MagicMock(spec=EnrollmentService),
        dependencies.get_recommendation_use_case: MagicMock(spec=GetRecommendationUseCase),
        dependencies.get_subscription_service: MagicMock(spec=SubscriptionService),
        dependencies.get_identity_provider: MagicMock(spec=IIdentityProvider),
        dependencies.get_quote_provider: MagicMock(spec=IPriceQuoteProvider),
        dependencies.get_sign_in_use_case: MagicMock(spec=SignInUseCase),
        dependencies.get_update_coins_use_case: MagicMock(spec=UpdateSelectedCoinsUseCase),
        dependencies.get_token_validator: MagicMock(spec=ITokenValidator),
    }


def _provide(mock: MagicMock):
    return lambda: mock


@pytest.fixture
def client(mocks) -> TestClient:
    app = create_app()
    for dependency, mock in mocks.items():
        app.dependency_overrides[dependency] = _provide(mock)
    return TestClient(app, raise_server_exceptions=False)


def _enrollment_view(days_remaining: int = 7) -> EnrollmentView:
    return EnrollmentView(
        symbol="BTC",
        currency="USD",
        enrolled_at=FIXED_NOW,
        status=EnrollmentStatus.ACTIVE,
        recommendation_available=days_remaining == 0,
        recommendation_available_at=FIXED_NOW + timedelta(days=7),
        days_until_recommendation=days_remaining,
    )


class TestHealth:
    """Tests for GET /api/v1/health."""

    def test_health(self, client) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "UP"
        assert body["service"] == "coinbase-price-tracker"
        assert "timestamp" in body


    def test_unknown_route_error_body(self, client) -> None:
        """Framework 404s use the same error body as domain errors."""
        response = client.get("/api/v1/nope")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not Found"
        assert body["status"] == 404
        assert "timestamp" in body
        assert "detail" not in body


class TestPriceEndpoints:
    """Tests for /price and /track routes."""

    def test_spot_price_omits_other_prices(self, client, mocks) -> None:
        mocks[dependencies.get_price_use_case].execute.return_value = PriceQuote(
            symbol="BTC", currency="USD", spot_price=Decimal("97000.50"), timestamp=FIXED_NOW
        )

        response = client.get("/api/v1/price/btc/spot")

        assert response.status_code == 200
        mocks[dependencies.get_price_use_case].execute.assert_called_once_with("btc", "spot")
        body = response.json()
        assert body["spotPrice"] == 97000.5
        assert body["symbol"] == "BTC"
        assert "buyPrice" not in body
        assert "sellPrice" not in body

    def test_all_prices(self, client, mocks) -> None:
        mocks[dependencies.get_price_tracker].record_and_get_price.return_value = PriceQuote(
            "ETH", "USD", Decimal("3000"), Decimal("3010"), Decimal("2990"), FIXED_NOW
        )
        body = client.get("/api/v1/price/eth/all").json()
        assert (body["spotPrice"], body["buyPrice"], body["sellPrice"]) == (3000.0, 3010.0, 2990.0)

    @pytest.mark.parametrize(
        "status, error",
        [
            (404, "Symbol not found or not supported by Coinbase"),
            (429, "Rate limit exceeded. Please try again later"),
            (503, "Coinbase API is temporarily unavailable"),
            (500, "Error communicating with Coinbase API"),
        ],
    )
    def test_exchange_errors(self, client, mocks, status: int, error: str) -> None:
        mocks[dependencies.get_price_use_case].execute.side_effect = ExchangeApiError(status, "upstream")
        response = client.get("/api/v1/price/btc/buy")
        assert response.status_code == status
        assert response.json()["error"] == error
        assert response.json()["status"] == status

    def test_invalid_symbol(self, client, mocks) -> None:
        mocks[dependencies.get_price_use_case].execute.side_effect = InvalidSymbolError("BTC-")
        assert client.get("/api/v1/price/BTC-/sell").status_code == 400

    def test_history(self, client, mocks) -> None:
        point = PricePoint(Decimal("1"), Decimal("2"), Decimal("0.5"), FIXED_NOW)
        mocks[dependencies.get_price_tracker].get_price_history.return_value = PriceHistory(
            "BTC", "USD", [point], 1
        )
        body = client.get("/api/v1/price/btc/history").json()
        assert body["totalRecords"] == 1
        assert body["history"][0]["sellPrice"] == 0.5

    def test_start_and_stop_tracking(self, client, mocks) -> None:
        tracker = mocks[dependencies.get_price_tracker]

        started = client.post("/api/v1/track/btc").json()
        stopped = client.delete("/api/v1/track/btc").json()

        tracker.start_tracking.assert_called_once_with("btc")
        tracker.stop_tracking.assert_called_once_with("btc")
        assert started["message"] == "Started tracking BTC"
        assert stopped["message"] == "Stopped tracking BTC"

    def test_tracked_symbols(self, client, mocks) -> None:
        mocks[dependencies.get_price_tracker].get_tracking_status.return_value = TrackingStatus(
            ["BTC-USD"], 1, FIXED_NOW
        )
        body = client.get("/api/v1/track").json()
        assert body["trackedSymbols"] == ["BTC-USD"]
        assert body["totalTracked"] == 1


class TestEnrollmentEndpoints:
    """Tests for /enroll and /recommendation routes."""

    def test_enroll(self, client, mocks) -> None:
        mocks[dependencies.get_enrollment_service].enroll_symbol.return_value = _enrollment_view()
        response = client.post("/api/v1/enroll/btc")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "ACTIVE"
        assert body["recommendationAvailable"] is False
        assert body["daysUntilRecommendation"] == 7

    def test_status_not_enrolled(self, client, mocks) -> None:
        mocks[dependencies.get_enrollment_service].get_enrollment_status.side_effect = (
            SymbolNotEnrolledError("DOGE")
        )
        response = client.get("/api/v1/enroll/doge")
        assert response.status_code == 404
        assert response.json()["action"] == "Enroll using POST /api/v1/enroll/DOGE"

    def test_unenroll(self, client, mocks) -> None:
        response = client.delete("/api/v1/enroll/eth")
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully unenrolled ETH"

    def test_list(self, client, mocks) -> None:
        mocks[dependencies.get_enrollment_service].list_enrollments.return_value = [_enrollment_view(0)]
        body = client.get("/api/v1/enroll").json()
        assert len(body) == 1
        assert body[0]["recommendationAvailable"] is True

    def test_recommendation(self, client, mocks) -> None:
        mocks[dependencies.get_recommendation_use_case].execute.return_value = Recommendation(
            symbol="BTC",
            currency="USD",
            recommendation=RecommendationType.BUY,
            reasoning="Positive market sentiment detected.",
            sentiment=SentimentSummary("POSITIVE", 0.8, 0.1, 0.1, 20),
            trend=TrendData(Decimal("105"), Decimal("100"), True, 5.0),
            timestamp=FIXED_NOW,
        )
        body = client.get("/api/v1/recommendation/btc").json()
        assert body["recommendation"] == "BUY"
        assert body["sentiment"]["tweetsAnalyzed"] == 20
        assert body["trend"]["sevenDayMovingAverage"] == 100.0
        assert body["trend"]["trendingUpwards"] is True

    def test_recommendation_not_available(self, client, mocks) -> None:
        mocks[dependencies.get_recommendation_use_case].execute.side_effect = (
            RecommendationNotAvailableError("BTC-USD", FIXED_NOW + timedelta(days=3), 3)
        )
        response = client.get("/api/v1/recommendation/btc")
        assert response.status_code == 400
        body = response.json()
        assert body["daysRemaining"] == 3
        assert body["symbol"] == "BTC-USD"
        assert body["availableAt"] == (FIXED_NOW + timedelta(days=3)).isoformat()


class TestSubscriptionEndpoints:
    """Tests for POST /api/v1/subscribe."""

    def test_subscribe(self, client, mocks) -> None:
        mocks[dependencies.get_subscription_service].subscribe.return_value = SubscriptionResult(
            "+15****67", "Successfully subscribed to crypto price notifications", FIXED_NOW
        )
        response = client.post("/api/v1/subscribe", json={"phoneNumber": PHONE, "name": "Ada"})
        assert response.status_code == 201
        assert response.json()["phoneNumber"] == "+15****67"
        mocks[dependencies.get_subscription_service].subscribe.assert_called_once_with(PHONE, "Ada")

    def test_invalid_phone(self, client, mocks) -> None:
        response = client.post("/api/v1/subscribe", json={"phoneNumber": "5551234"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert "phoneNumber" in body["errors"]
        mocks[dependencies.get_subscription_service].subscribe.assert_not_called()

    def test_store_failure(self, client, mocks) -> None:
        mocks[dependencies.get_subscription_service].subscribe.side_effect = (
            SubscriptionStoreError("AccessDenied")
        )
        response = client.post("/api/v1/subscribe", json={"phoneNumber": PHONE})
        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_unexpected_error(self, client, mocks) -> None:
        mocks[dependencies.get_subscription_service].subscribe.side_effect = RuntimeError("boom")
        response = client.post("/api/v1/subscribe", json={"phoneNumber": PHONE})
        assert response.status_code == 500
        assert "boom" not in response.text


class TestAuthEndpoints:
    """Tests for /api/v1/auth routes."""

    def test_signup(self, client, mocks) -> None:
        identity = mocks[dependencies.get_identity_provider]
        identity.sign_up.return_value = AuthResult(True, "Account created successfully", cognito_user_id="sub-1")
        response = client.post(
            "/api/v1/auth/signup", json={"phoneNumber": PHONE, "password": "Passw0rd!", "name": "Ada"}
        )
        assert response.status_code == 201
        assert response.json()["cognitoUserId"] == "sub-1"
        identity.sign_up.assert_called_once_with(PHONE, "Passw0rd!", "Ada")

    def test_signup_failure(self, client, mocks) -> None:
        mocks[dependencies.get_identity_provider].sign_up.return_value = AuthResult(
            False, "An account with this phone number already exists"
        )
        response = client.post("/api/v1/auth/signup", json={"phoneNumber": PHONE, "password": "x"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_verify(self, client, mocks) -> None:
        identity = mocks[dependencies.get_identity_provider]
        identity.confirm_sign_up.return_value = AuthResult(False, "Invalid verification code")
        response = client.post("/api/v1/auth/verify", json={"phoneNumber": PHONE, "verificationCode": "1"})
        assert response.status_code == 400
        identity.confirm_sign_up.assert_called_once_with(PHONE, "1")

    def test_signin(self, client, mocks) -> None:
        mocks[dependencies.get_sign_in_use_case].execute.return_value = AuthResult(
            True,
            "Sign in successful",
            access_token="access",
            subscriber=Subscriber(PHONE, "Ada", FIXED_NOW, selected_coins=["BTC", "ETH"]),
        )
        response = client.post("/api/v1/auth/signin", json={"phoneNumber": PHONE, "password": "pw"})
        assert response.status_code == 200
        body = response.json()
        assert body["accessToken"] == "access"
        assert body["subscriber"]["selectedCoins"] == ["BTC", "ETH"]

    def test_signin_failure(self, client, mocks) -> None:
        mocks[dependencies.get_sign_in_use_case].execute.return_value = AuthResult(
            False, "Invalid phone number or password"
        )
        response = client.post("/api/v1/auth/signin", json={"phoneNumber": PHONE, "password": "bad"})
        assert response.status_code == 401

    def test_resend_code(self, client, mocks) -> None:
        mocks[dependencies.get_identity_provider].resend_confirmation_code.return_value = AuthResult(
            True, "Verification code resent to your phone"
        )
        assert client.post("/api/v1/auth/resend-code", json={"phoneNumber": PHONE}).status_code == 200

    def test_complete_signup_falls_back_to_verification_code(self, client, mocks) -> None:
        subscriptions = mocks[dependencies.get_subscription_service]
        subscriptions.subscribe_with_coins.return_value = SubscriptionResult(
            "+15****67", "Successfully subscribed to crypto price notifications", FIXED_NOW
        )
        response = client.post(
            "/api/v1/auth/complete-signup",
            json={"phoneNumber": PHONE, "name": "Ada", "verificationCode": "sub-1", "selectedCoins": ["ETH"]},
        )
        assert response.status_code == 201
        subscriptions.subscribe_with_coins.assert_called_once_with(PHONE, "Ada", "sub-1", ["ETH"])

    def test_popular_coins(self, client, mocks) -> None:
        provider = mocks[dependencies.get_quote_provider]
        provider.get_popular_coins.return_value = [CoinInfo("BTC", "Bitcoin", "Bitcoin (BTC)")]
        response = client.get("/api/v1/auth/coins/popular", params={"limit": 5})
        assert response.json() == [{"symbol": "BTC", "name": "Bitcoin", "displayName": "Bitcoin (BTC)"}]
        provider.get_popular_coins.assert_called_once_with(5)

    def test_popular_coins_limit_validated(self, client) -> None:
        assert client.get("/api/v1/auth/coins/popular", params={"limit": 0}).status_code == 400


class TestUpdateCoins:
    """Tests for PUT /api/v1/auth/coins."""

    BODY = {"phoneNumber": PHONE, "selectedCoins": ["ETH"]}

    def test_missing_token(self, client, mocks) -> None:
        response = client.put("/api/v1/auth/coins", json=self.BODY)
        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "Missing or invalid Authorization header."
        assert body["status"] == 401
        assert "timestamp" in body
        mocks[dependencies.get_update_coins_use_case].execute.assert_not_called()

    def test_invalid_token(self, client, mocks) -> None:
        mocks[dependencies.get_token_validator].validate.side_effect = ValueError("expired")
        response = client.put(
            "/api/v1/auth/coins", json=self.BODY, headers={"Authorization": "Bearer bad"}
        )
        assert response.status_code == 401

    def test_token_for_other_user(self, client, mocks) -> None:
        mocks[dependencies.get_token_validator].validate.return_value = {"username": "+15550000000"}
        response = client.put(
            "/api/v1/auth/coins", json=self.BODY, headers={"Authorization": "Bearer token"}
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Token does not belong to this phone number."

    def test_update(self, client, mocks) -> None:
        mocks[dependencies.get_token_validator].validate.return_value = {"username": PHONE}
        use_case = mocks[dependencies.get_update_coins_use_case]
        use_case.execute.return_value = AuthResult(
            True,
            "Coins updated successfully",
            subscriber=Subscriber(PHONE, "Ada", FIXED_NOW, selected_coins=["BTC", "ETH"]),
        )
        response = client.put(
            "/api/v1/auth/coins", json=self.BODY, headers={"Authorization": "Bearer token"}
        )
        assert response.status_code == 200
        use_case.execute.assert_called_once_with(PHONE, ["ETH"])
        mocks[dependencies.get_token_validator].validate.assert_called_once_with("token")

    def test_unknown_subscriber(self, client, mocks) -> None:
        mocks[dependencies.get_token_validator].validate.return_value = {"cognito:username": PHONE}
        mocks[dependencies.get_update_coins_use_case].execute.return_value = AuthResult(
            False, "Subscriber not found"
        )
        response = client.put(
            "/api/v1/auth/coins", json=self.BODY, headers={"Authorization": "Bearer token"}
        )
        assert response.status_code == 404
