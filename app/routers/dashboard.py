# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoints
# =============================================================================

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.auth import get_current_user, AuthUser
from app.dependencies import DashboardServiceDep

router = APIRouter()


class DashboardStats(BaseModel):
    """Counts shown on the dashboard cards."""
    clients: int
    workflows: int
    tasks: int
    team_members: int


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_stats(
    dashboard: DashboardServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Row counts for clients, workflows, tasks and team members."""
    return dashboard.get_stats()
