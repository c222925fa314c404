# mhsurvey/api/v1/endpoints/reports.py
"""
Relatorios: admin ve todos; manager solo los de su empresa.
Generar y borrar quedan reservados al admin.
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query
from fastapi.responses import Response

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import get_pagination, report_service
from mhsurvey.core.exceptions import AuthorizationError
from mhsurvey.models.report import Report, ReportStatus
from mhsurvey.models.user import Role, User
from mhsurvey.schemas.admin import GenerateReportIn
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.reports import ReportService, ReportStats, export_filename

router = APIRouter(tags=["reports"])

reports_guard = guard("reports")


def _require_admin(user: User) -> None:
    if user.role != Role.ADMIN:
        raise AuthorizationError("Apenas administradores")


async def _visible_report(service: ReportService, report_id: str, user: User) -> Report:
    report = await service.get_by_id(report_id)
    if user.role != Role.ADMIN and report.company_id != user.company_id:
        raise AuthorizationError("Relatório de outra empresa")
    return report


@router.get("/reports", response_model=Page[Report])
async def list_reports(
    status: Optional[ReportStatus] = Query(None),
    survey_id: Optional[str] = Query(None, alias="surveyId"),
    company_id: Optional[str] = Query(None, alias="companyId"),
    pagination: PaginationParams = Depends(get_pagination),
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    if user.role != Role.ADMIN:
        company_id = user.company_id
    if company_id:
        return await service.get_by_company(company_id, pagination)
    if survey_id:
        return await service.get_by_survey(survey_id, pagination)
    if status:
        return await service.get_by_status(status, pagination)
    return await service.get_all(pagination)


@router.get("/reports/stats", response_model=ReportStats)
async def report_stats(service: ReportService = Depends(report_service), user: User = Depends(reports_guard)):
    _require_admin(user)
    return await service.stats()


@router.post("/reports/generate", response_model=Report, status_code=202)
async def generate_report(
    payload: GenerateReportIn,
    background: BackgroundTasks,
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    _require_admin(user)
    report = await service.generate(payload.survey_id, payload.cycle_id, payload.sector)
    background.add_task(service.complete_generation, report.id)
    return report


@router.get("/reports/{report_id}", response_model=Report)
async def get_report(
    report_id: str = Path(...),
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    return await _visible_report(service, report_id, user)


@router.get("/reports/{report_id}/export/csv")
async def export_report_csv(
    report_id: str = Path(...),
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    report = await _visible_report(service, report_id, user)
    content = await service.export_csv(report_id)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(report, "csv")}"'},
    )


@router.get("/reports/{report_id}/export/pdf")
async def export_report_pdf(
    report_id: str = Path(...),
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    report = await _visible_report(service, report_id, user)
    content = await service.export_pdf(report_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(report, "pdf")}"'},
    )


@router.delete("/reports/{report_id}", status_code=204)
async def delete_report(
    report_id: str = Path(...),
    service: ReportService = Depends(report_service),
    user: User = Depends(reports_guard),
):
    _require_admin(user)
    await service.delete(report_id)
