# mhsurvey/api/v1/endpoints/manager.py
from fastapi import APIRouter, Depends

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import dashboard_service, get_pagination, report_service
from mhsurvey.models.report import Report
from mhsurvey.models.user import User
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.dashboard import DashboardService, ManagerDashboard
from mhsurvey.services.reports import ReportService

router = APIRouter(tags=["manager"])


@router.get("/manager/dashboard", response_model=ManagerDashboard)
async def manager_dashboard(
    user: User = Depends(guard("manager.dashboard")),
    service: DashboardService = Depends(dashboard_service),
):
    return await service.manager(user)


@router.get("/manager/reports", response_model=Page[Report])
async def manager_reports(
    user: User = Depends(guard("manager.reports")),
    pagination: PaginationParams = Depends(get_pagination),
    service: ReportService = Depends(report_service),
):
    # relatorios del sector del gestor más los generales de su empresa
    if user.sector:
        return await service.get_by_sector(user.company_id, user.sector, pagination)
    return await service.get_by_company(user.company_id, pagination)
