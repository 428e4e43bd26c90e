"""
Router for live prices and process-local price tracking.

Price responses omit prices that were not requested.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from crypto_tracker.application.services.price_tracker import PriceTrackingService
from crypto_tracker.application.use_cases.get_price import GetPriceUseCase
from crypto_tracker.infrastructure.entrypoints.dependencies import get_price_tracker, get_price_use_case
from crypto_tracker.infrastructure.entrypoints.schemas import (
    PriceHistoryResponse,
    PriceResponse,
    SymbolActionResponse,
    TrackingStatusResponse,
)

router = APIRouter(tags=["prices"])


@router.get("/price/{symbol}/spot", response_model=PriceResponse, response_model_exclude_none=True)
def get_spot_price(symbol: str, use_case: GetPriceUseCase = Depends(get_price_use_case)):
    return PriceResponse.model_validate(use_case.execute(symbol, "spot"))


@router.get("/price/{symbol}/buy", response_model=PriceResponse, response_model_exclude_none=True)
def get_buy_price(symbol: str, use_case: GetPriceUseCase = Depends(get_price_use_case)):
    return PriceResponse.model_validate(use_case.execute(symbol, "buy"))


@router.get("/price/{symbol}/sell", response_model=PriceResponse, response_model_exclude_none=True)
def get_sell_price(symbol: str, use_case: GetPriceUseCase = Depends(get_price_use_case)):
    return PriceResponse.model_validate(use_case.execute(symbol, "sell"))


@router.get("/price/{symbol}/all", response_model=PriceResponse, response_model_exclude_none=True)
def get_all_prices(symbol: str, tracker: PriceTrackingService = Depends(get_price_tracker)):
    """All three prices; recorded in the history when *symbol* is tracked."""
    return PriceResponse.model_validate(tracker.record_and_get_price(symbol))


@router.get("/price/{symbol}/history", response_model=PriceHistoryResponse)
def get_price_history(symbol: str, tracker: PriceTrackingService = Depends(get_price_tracker)):
    return PriceHistoryResponse.model_validate(tracker.get_price_history(symbol))


@router.post("/track/{symbol}", response_model=SymbolActionResponse)
def start_tracking(symbol: str, tracker: PriceTrackingService = Depends(get_price_tracker)):
    tracker.start_tracking(symbol)
    return SymbolActionResponse(
        message=f"Started tracking {symbol.upper()}",
        symbol=symbol.upper(),
        timestamp=datetime.now(timezone.utc),
    )


@router.delete("/track/{symbol}", response_model=SymbolActionResponse)
def stop_tracking(symbol: str, tracker: PriceTrackingService = Depends(get_price_tracker)):
    tracker.stop_tracking(symbol)
    return SymbolActionResponse(
        message=f"Stopped tracking {symbol.upper()}",
        symbol=symbol.upper(),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/track", response_model=TrackingStatusResponse)
def get_tracked_symbols(tracker: PriceTrackingService = Depends(get_price_tracker)):
    return TrackingStatusResponse.model_validate(tracker.get_tracking_status())
