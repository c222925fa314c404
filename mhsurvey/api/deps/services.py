# mhsurvey/api/deps/services.py
"""Providers de servicios para Depends(); todos comparten el store de la app."""
from typing import Optional

from fastapi import Depends, Query

from mhsurvey.db.store import MemoryStore, get_store
from mhsurvey.services.base import PaginationParams
from mhsurvey.services.companies import CompanyService
from mhsurvey.services.dashboard import DashboardService
from mhsurvey.services.employees import EmployeeService
from mhsurvey.services.gamification import GamificationService
from mhsurvey.services.payments import PaymentService
from mhsurvey.services.questions import QuestionService
from mhsurvey.services.reports import ReportService
from mhsurvey.services.settings import SettingsService
from mhsurvey.services.surveys import SurveyService
from mhsurvey.services.videos import VideoService


def get_pagination(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
) -> PaginationParams:
    if limit is None:
        return PaginationParams(page=page)
    return PaginationParams(page=page, limit=limit)


def company_service(store: MemoryStore = Depends(get_store)) -> CompanyService:
    return CompanyService(store)


def employee_service(store: MemoryStore = Depends(get_store)) -> EmployeeService:
    return EmployeeService(store)


def question_service(store: MemoryStore = Depends(get_store)) -> QuestionService:
    return QuestionService(store)


def survey_service(store: MemoryStore = Depends(get_store)) -> SurveyService:
    return SurveyService(store)


def report_service(store: MemoryStore = Depends(get_store)) -> ReportService:
    return ReportService(store)


def video_service(store: MemoryStore = Depends(get_store)) -> VideoService:
    return VideoService(store)


def payment_service(store: MemoryStore = Depends(get_store)) -> PaymentService:
    return PaymentService(store)


def settings_service(store: MemoryStore = Depends(get_store)) -> SettingsService:
    return SettingsService(store)


def gamification_service(store: MemoryStore = Depends(get_store)) -> GamificationService:
    return GamificationService(store)


def dashboard_service(store: MemoryStore = Depends(get_store)) -> DashboardService:
    return DashboardService(store)
