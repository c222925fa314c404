# mhsurvey/api/v1/endpoints/employee.py
"""Pantallas del funcionario: inicio, questionario, videos con quiz y gamificación."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import (
    dashboard_service,
    gamification_service,
    get_pagination,
    settings_service,
    survey_service,
    video_service,
)
from mhsurvey.core.exceptions import AuthorizationError
from mhsurvey.models.survey import SurveyResponse
from mhsurvey.models.user import User
from mhsurvey.models.video import GamificationProgress, Quiz, QuizResult, Video
from mhsurvey.schemas.employee import QuizSubmitIn, SurveyFormOut, SurveySubmitIn
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.dashboard import DashboardService, EmployeeDashboard
from mhsurvey.services.gamification import GamificationService, RankingEntry
from mhsurvey.services.settings import SettingsService
from mhsurvey.services.surveys import SurveyService
from mhsurvey.services.videos import VideoService

router = APIRouter(tags=["employee"])


@router.get("/employee/dashboard", response_model=EmployeeDashboard)
async def employee_dashboard(
    user: User = Depends(guard("employee.dashboard")),
    service: DashboardService = Depends(dashboard_service),
):
    return await service.employee(user)


# -------- questionario --------
@router.get("/employee/surveys/{survey_id}", response_model=SurveyFormOut)
async def survey_form(
    survey_id: str = Path(...),
    user: User = Depends(guard("employee.survey")),
    surveys: SurveyService = Depends(survey_service),
    settings: SettingsService = Depends(settings_service),
):
    survey = await surveys.get_by_id(survey_id)
    if survey.company_id != user.company_id:
        raise AuthorizationError("Questionário não disponível para sua empresa")
    questions = await surveys.get_questions(survey_id)
    return SurveyFormOut(
        survey=survey,
        questions=[q for q in questions if q.is_active],
        within_business_hours=await settings.is_within_business_hours(survey.company_id),
    )


@router.post("/employee/surveys/{survey_id}", response_model=SurveyResponse, status_code=201)
async def submit_survey(
    payload: SurveySubmitIn,
    survey_id: str = Path(...),
    user: User = Depends(guard("employee.survey")),
    surveys: SurveyService = Depends(survey_service),
):
    return await surveys.submit_response(survey_id, user, payload.answers)


# -------- videos --------
@router.get("/employee/videos", response_model=Page[Video])
async def video_library(
    category: Optional[str] = Query(None),
    user: User = Depends(guard("employee.videos")),
    pagination: PaginationParams = Depends(get_pagination),
    service: VideoService = Depends(video_service),
):
    if category:
        return await service.get_by_category(category, pagination)
    return await service.get_active(pagination)


@router.post("/employee/videos/{video_id}/watched", response_model=GamificationProgress)
async def mark_video_watched(
    video_id: str = Path(...),
    user: User = Depends(guard("employee.videos")),
    service: VideoService = Depends(video_service),
):
    return await service.mark_watched(video_id, user.id)


@router.get(
    "/employee/videos/{video_id}/quiz",
    response_model=Quiz,
    response_model_exclude={"questions": {"__all__": {"correct_answer"}}},  # sin respuestas
)
async def get_quiz(
    video_id: str = Path(...),
    user: User = Depends(guard("employee.videos")),
    service: VideoService = Depends(video_service),
):
    return await service.get_quiz(video_id)


@router.post("/employee/videos/{video_id}/quiz", response_model=QuizResult)
async def submit_quiz(
    payload: QuizSubmitIn,
    video_id: str = Path(...),
    user: User = Depends(guard("employee.videos")),
    service: VideoService = Depends(video_service),
):
    return await service.submit_quiz(video_id, user.id, payload.answers)


# -------- gamificación --------
@router.get("/employee/gamification", response_model=GamificationProgress)
async def my_progress(
    user: User = Depends(guard("employee.gamification")),
    service: GamificationService = Depends(gamification_service),
):
    return await service.get_progress(user.id)


@router.get("/employee/gamification/ranking", response_model=List[RankingEntry])
async def ranking(
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(guard("employee.gamification")),
    service: GamificationService = Depends(gamification_service),
):
    return await service.ranking(user.company_id, limit)
