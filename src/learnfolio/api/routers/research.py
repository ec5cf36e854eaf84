"""Quote lookup, company research and savings projection endpoints."""

from fastapi import APIRouter, Depends

from learnfolio.api.deps import get_market_data_service
from learnfolio.api.schemas import (
    CompanyOverviewResponse,
    QuoteResponse,
    SavingsPlanRequest,
    SavingsProjectionResponse,
)
from learnfolio.domain.models import SavingsPlan
from learnfolio.services import MarketDataService, project

router = APIRouter(tags=["research"])


@router.get("/quotes/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    return QuoteResponse.model_validate(market.get_quote(symbol))


@router.get("/research/{symbol}", response_model=CompanyOverviewResponse)
def get_company_overview(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> CompanyOverviewResponse:
    """Company fundamentals: sector, valuation ratios, 52-week range."""
    return CompanyOverviewResponse.model_validate(market.get_company_overview(symbol))


@router.post("/savings/projection", response_model=SavingsProjectionResponse)
def project_savings(data: SavingsPlanRequest) -> SavingsProjectionResponse:
    """Project compound growth of a monthly savings plan."""
    projection = project(
        SavingsPlan(
            initial=data.initial,
            monthly_contribution=data.monthly_contribution,
            years=data.years,
            annual_rate_percent=data.annual_rate_percent,
        )
    )
    return SavingsProjectionResponse.model_validate(projection)
