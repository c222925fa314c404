# mhsurvey/api/v1/endpoints/settings.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import settings_service
from mhsurvey.models.company import BusinessHours
from mhsurvey.models.settings import SystemSettings
from mhsurvey.schemas.admin import SettingsUpdate, ToggleIn
from mhsurvey.services.settings import SettingsService

router = APIRouter(tags=["admin/settings"], dependencies=[Depends(guard("admin.settings"))])


@router.get("/admin/settings/{company_id}", response_model=SystemSettings)
async def get_settings(company_id: str = Path(...), service: SettingsService = Depends(settings_service)):
    return await service.get_settings(company_id)


@router.patch("/admin/settings/{company_id}", response_model=SystemSettings)
async def update_settings(
    payload: SettingsUpdate,
    company_id: str = Path(...),
    service: SettingsService = Depends(settings_service),
):
    return await service.update_settings(company_id, payload.model_dump(exclude_unset=True))


@router.put("/admin/settings/{company_id}/business-hours", response_model=SystemSettings)
async def update_business_hours(
    payload: BusinessHours,
    company_id: str = Path(...),
    service: SettingsService = Depends(settings_service),
):
    return await service.update_business_hours(company_id, payload)


@router.put("/admin/settings/{company_id}/outside-hours", response_model=SystemSettings)
async def toggle_outside_hours(
    payload: ToggleIn,
    company_id: str = Path(...),
    service: SettingsService = Depends(settings_service),
):
    return await service.toggle_outside_hours(company_id, payload.allow)


@router.get("/admin/settings/{company_id}/within-hours")
async def within_business_hours(
    company_id: str = Path(...),
    at: Optional[datetime] = Query(None, description="Momento a avaliar; sem fuso = UTC (padrão: agora)"),
    service: SettingsService = Depends(settings_service),
):
    return {"companyId": company_id, "withinBusinessHours": await service.is_within_business_hours(company_id, at)}
