"""API endpoints for the exchange."""

import structlog
from fastapi import APIRouter, Depends

from bonding.exchange import Exchange, get_default_exchange
from bonding.models import (
    AssetView,
    BuyRequest,
    CreateAssetRequest,
    CreateAssetResponse,
    ErrorResponse,
    RegistryView,
    SellRequest,
    TradeResponse,
)

logger = structlog.get_logger()

router = APIRouter()

# Documented error bodies, keyed by the status each ExchangeError maps to
ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Invalid amount or metadata"},
    404: {"model": ErrorResponse, "description": "Unknown asset id"},
    409: {"model": ErrorResponse, "description": "Asset transitioned or registry state conflict"},
    422: {"model": ErrorResponse, "description": "Arithmetic fault or invalid request"},
}


def get_exchange() -> Exchange:
    """Dependency provider for the exchange instance.

    Override this in tests to inject an isolated exchange:
        app.dependency_overrides[get_exchange] = lambda: exchange
    """
    return get_default_exchange()


@router.post("/initialize", response_model=RegistryView, responses=ERROR_RESPONSES)
def initialize(exchange: Exchange = Depends(get_exchange)) -> RegistryView:
    """One-time registry setup. A second call returns 409."""
    return RegistryView.from_snapshot(exchange.initialize())


@router.get("/registry", response_model=RegistryView)
def registry_state(exchange: Exchange = Depends(get_exchange)) -> RegistryView:
    return RegistryView.from_snapshot(exchange.state())


@router.post(
    "/assets",
    response_model=CreateAssetResponse,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def create_asset(
    request: CreateAssetRequest,
    exchange: Exchange = Depends(get_exchange),
) -> CreateAssetResponse:
    asset_id = exchange.create_asset(
        name=request.name,
        symbol=request.symbol,
        asset_handle=request.asset_handle,
        creator=request.creator,
    )
    return CreateAssetResponse(asset_id=asset_id)


@router.get("/assets/{asset_id}", response_model=AssetView, responses=ERROR_RESPONSES)
def get_asset(asset_id: int, exchange: Exchange = Depends(get_exchange)) -> AssetView:
    return AssetView.from_snapshot(exchange.get_asset(asset_id))


@router.post("/assets/{asset_id}/buy", response_model=TradeResponse, responses=ERROR_RESPONSES)
def buy(
    asset_id: int,
    request: BuyRequest,
    exchange: Exchange = Depends(get_exchange),
) -> TradeResponse:
    """Buy supply. The gross reserve must already be in custody.

    amountOut in the response is the supply custody releases to the trader.
    """
    return TradeResponse.from_outcome(exchange.buy(asset_id, request.gross_amount))


@router.post("/assets/{asset_id}/sell", response_model=TradeResponse, responses=ERROR_RESPONSES)
def sell(
    asset_id: int,
    request: SellRequest,
    exchange: Exchange = Depends(get_exchange),
) -> TradeResponse:
    """Sell supply. The supply must already be in custody.

    amountOut in the response is the net reserve custody releases to the trader.
    """
    return TradeResponse.from_outcome(exchange.sell(asset_id, request.amount))


@router.post(
    "/assets/{asset_id}/quote/buy",
    response_model=TradeResponse,
    responses=ERROR_RESPONSES,
)
def quote_buy(
    asset_id: int,
    request: BuyRequest,
    exchange: Exchange = Depends(get_exchange),
) -> TradeResponse:
    """Preview a buy without committing it."""
    return TradeResponse.from_outcome(exchange.quote_buy(asset_id, request.gross_amount))


@router.post(
    "/assets/{asset_id}/quote/sell",
    response_model=TradeResponse,
    responses=ERROR_RESPONSES,
)
def quote_sell(
    asset_id: int,
    request: SellRequest,
    exchange: Exchange = Depends(get_exchange),
) -> TradeResponse:
    """Preview a sell without committing it."""
    return TradeResponse.from_outcome(exchange.quote_sell(asset_id, request.amount))
