"""Portfolio endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from investsim.api.deps import get_csv_exporter, get_portfolio_service
from investsim.api.schemas import PortfolioResponse
from investsim.reports import CsvExporter
from investsim.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/{user_id}", response_model=PortfolioResponse)
def get_portfolio(
    user_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Cash, valued holdings and profit/loss."""
    return PortfolioResponse.model_validate(service.get_snapshot(user_id))


@router.get("/{user_id}/report")
def download_report(
    user_id: str,
    exporter: CsvExporter = Depends(get_csv_exporter),
) -> Response:
    """Download the portfolio report as CSV."""
    return Response(
        content=exporter.portfolio_csv(user_id),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="portfolio_{user_id}.csv"'},
    )
