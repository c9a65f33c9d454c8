"""
CryptoLedger - Dashboard Endpoint
"""
from fastapi import APIRouter, Depends

from cryptoledger.core.portfolio.dashboard import DashboardService
from cryptoledger.dependencies import get_dashboard_service
from cryptoledger.schemas.portfolio import DashboardResponse

router = APIRouter()


@router.get("/{user_id}", response_model=DashboardResponse)
async def get_dashboard(
    user_id: int,
    service: DashboardService = Depends(get_dashboard_service),
):
    """Summary, recent transactions, position breakdown and watchlist."""
    dashboard = await service.get_dashboard(user_id)
    return DashboardResponse.model_validate(dashboard)
