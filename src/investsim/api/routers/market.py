"""Market browsing and quote endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from investsim.api.deps import get_market_service, get_quote_service
from investsim.api.schemas import (
    ListingListResponse,
    ListingResponse,
    ListingUpsertRequest,
    QuoteResponse,
)
from investsim.domain.models import AssetType
from investsim.services import MarketService, QuoteService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/listings", response_model=ListingListResponse)
def list_listings(
    asset_type: Optional[AssetType] = Query(None, description="stock, mutual_fund or bond"),
    service: MarketService = Depends(get_market_service),
) -> ListingListResponse:
    """Browse listings ordered by name."""
    listings = service.list_listings(asset_type=asset_type)
    return ListingListResponse(
        listings=[ListingResponse.model_validate(item) for item in listings],
        count=len(listings),
    )


@router.get("/listings/{symbol}", response_model=ListingResponse)
def get_listing(
    symbol: str,
    service: MarketService = Depends(get_market_service),
) -> ListingResponse:
    """Get one listing."""
    return ListingResponse.model_validate(service.get_listing(symbol))


@router.put("/listings/{symbol}", response_model=ListingResponse)
def upsert_listing(
    symbol: str,
    data: ListingUpsertRequest,
    service: MarketService = Depends(get_market_service),
) -> ListingResponse:
    """Create or update a listing."""
    listing = service.upsert_listing(
        symbol=symbol,
        name=data.name,
        asset_type=data.asset_type,
        price=data.price,
        change_percent=data.change_percent,
        risk_level=data.risk_level,
        minimum_investment=data.minimum_investment,
        description=data.description,
    )
    return ListingResponse.model_validate(listing)


@router.get("/search", response_model=ListingListResponse)
def search_listings(
    q: str = Query(..., description="Part of a ticker symbol"),
    limit: int = Query(5, ge=1, le=50),
    service: MarketService = Depends(get_market_service),
) -> ListingListResponse:
    """Search listings by symbol."""
    listings = service.search(q, limit=limit)
    return ListingListResponse(
        listings=[ListingResponse.model_validate(item) for item in listings],
        count=len(listings),
    )


@router.get("/quote/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    quote_service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    """Current quote for a symbol."""
    return QuoteResponse.model_validate(quote_service.get_quote(symbol))
