"""Watchlist endpoints."""

from fastapi import APIRouter, Depends, Response

from investsim.api.deps import get_watchlist_service
from investsim.api.schemas import (
    WatchlistAddRequest,
    WatchlistEntryResponse,
    WatchlistResponse,
)
from investsim.services import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("/{user_id}", response_model=WatchlistResponse)
def get_watchlist(
    user_id: str,
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    """Watched symbols with their listing data."""
    entries = service.list(user_id)
    return WatchlistResponse(
        items=[WatchlistEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.post("/{user_id}", response_model=WatchlistResponse, status_code=201)
def add_to_watchlist(
    user_id: str,
    data: WatchlistAddRequest,
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    """Follow a symbol; returns the updated watchlist."""
    service.add(user_id, data.symbol)
    entries = service.list(user_id)
    return WatchlistResponse(
        items=[WatchlistEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.delete("/{user_id}/{symbol}", status_code=204)
def remove_from_watchlist(
    user_id: str,
    symbol: str,
    service: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    """Stop following a symbol."""
    service.remove(user_id, symbol)
    return Response(status_code=204)
