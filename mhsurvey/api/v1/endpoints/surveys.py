# mhsurvey/api/v1/endpoints/surveys.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import get_pagination, survey_service
from mhsurvey.models.question import Question
from mhsurvey.models.survey import Survey, SurveyCycle, SurveyStatus
from mhsurvey.schemas.admin import SurveyIn, SurveyStatusIn, SurveyUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.surveys import SurveyService, SurveyStats

router = APIRouter(tags=["admin/surveys"], dependencies=[Depends(guard("admin.surveys"))])


@router.get("/admin/surveys", response_model=Page[Survey])
async def list_surveys(
    status: Optional[SurveyStatus] = Query(None),
    company_id: Optional[str] = Query(None, alias="companyId"),
    pagination: PaginationParams = Depends(get_pagination),
    service: SurveyService = Depends(survey_service),
):
    if status:
        return await service.get_by_status(status, pagination)
    if company_id:
        return await service.get_by_company(company_id, pagination)
    return await service.get_all(pagination)


@router.get("/admin/surveys/stats", response_model=SurveyStats)
async def survey_stats(service: SurveyService = Depends(survey_service)):
    return await service.stats()


@router.get("/admin/surveys/{survey_id}", response_model=Survey)
async def get_survey(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.get_by_id(survey_id)


@router.get("/admin/surveys/{survey_id}/questions", response_model=List[Question])
async def get_survey_questions(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.get_questions(survey_id)


@router.post("/admin/surveys", response_model=Survey, status_code=201)
async def create_survey(payload: SurveyIn, service: SurveyService = Depends(survey_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/surveys/{survey_id}", response_model=Survey)
async def update_survey(
    payload: SurveyUpdate,
    survey_id: str = Path(...),
    service: SurveyService = Depends(survey_service),
):
    return await service.update(survey_id, payload.model_dump(exclude_unset=True))


@router.put("/admin/surveys/{survey_id}/status", response_model=Survey)
async def update_survey_status(
    payload: SurveyStatusIn,
    survey_id: str = Path(...),
    service: SurveyService = Depends(survey_service),
):
    return await service.update_status(survey_id, payload.status)


@router.post("/admin/surveys/{survey_id}/duplicate", response_model=Survey, status_code=201)
async def duplicate_survey(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.duplicate(survey_id)


@router.delete("/admin/surveys/{survey_id}", status_code=204)
async def delete_survey(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    # cierra el questionario (no se elimina)
    await service.delete(survey_id)


# -------- ciclos --------
@router.get("/admin/surveys/{survey_id}/cycles", response_model=List[SurveyCycle])
async def list_cycles(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.get_cycles(survey_id)


@router.get("/admin/surveys/{survey_id}/cycles/active", response_model=Optional[SurveyCycle])
async def active_cycle(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.get_active_cycle(survey_id)


@router.post("/admin/surveys/{survey_id}/cycles", response_model=SurveyCycle, status_code=201)
async def open_cycle(survey_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.create_cycle(survey_id)


@router.post("/admin/cycles/{cycle_id}/close", response_model=SurveyCycle)
async def close_cycle(cycle_id: str = Path(...), service: SurveyService = Depends(survey_service)):
    return await service.close_cycle(cycle_id)
