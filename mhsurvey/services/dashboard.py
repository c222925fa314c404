# mhsurvey/services/dashboard.py
"""
Indicadores de las pantallas de inicio por rol.

- admin: totales globales
- manager: su sector dentro de su empresa
- employee: su progreso y los questionarios pendientes
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import List, Literal, Optional

from pydantic import Field

from mhsurvey.core.config import settings
from mhsurvey.db.store import MemoryStore
from mhsurvey.models.base import CamelModel, utcnow
from mhsurvey.models.payment import PaymentStatus
from mhsurvey.models.report import Alert, ReportStatus
from mhsurvey.models.survey import SurveyStatus
from mhsurvey.models.user import User
from mhsurvey.services.gamification import level_for, next_level

CLOSING_SOON = timedelta(days=3)


class AdminDashboard(CamelModel):
    total_companies: int
    active_companies: int
    total_employees: int
    active_employees: int
    active_surveys: int
    ready_reports: int
    pending_payments: int
    overdue_payments: int


class SurveyProgress(CamelModel):
    survey_id: str
    survey_title: str
    total_responses: int
    expected_responses: int
    deadline: datetime
    status: Literal["open", "closing_soon", "closed"]


class ManagerDashboard(CamelModel):
    sector: Optional[str]
    total_employees: int
    active_employees: int
    response_rate: float
    average_scores: dict = Field(default_factory=dict)
    alerts: List[Alert] = Field(default_factory=list)
    surveys: List[SurveyProgress] = Field(default_factory=list)


class PendingSurvey(CamelModel):
    id: str
    title: str
    description: str
    deadline: datetime
    days_remaining: int
    questions_count: int


class EmployeeDashboard(CamelModel):
    level: int
    level_title: str
    total_points: int
    points_to_next_level: int
    completed_surveys: int
    watched_videos: int
    quizzes_passed: int
    pending_surveys: List[PendingSurvey] = Field(default_factory=list)
    available_videos: int = 0


class DashboardService:
    def __init__(self, store: MemoryStore, delay_ms: Optional[int] = None):
        self.store = store
        self.delay_ms = settings.MOCK_DELAY_MS if delay_ms is None else delay_ms

    async def delay(self) -> None:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)

    async def admin(self) -> AdminDashboard:
        await self.delay()
        s = self.store
        return AdminDashboard(
            total_companies=len(s.companies),
            active_companies=sum(1 for c in s.companies.values() if c.is_active),
            total_employees=len(s.employees),
            active_employees=sum(1 for e in s.employees.values() if e.is_active),
            active_surveys=sum(1 for x in s.surveys.values() if x.status == SurveyStatus.ACTIVE),
            ready_reports=sum(
                1 for r in s.reports.values()
                if r.status == ReportStatus.READY and r.deleted_at is None
            ),
            pending_payments=sum(1 for p in s.payments.values() if p.status == PaymentStatus.PENDING),
            overdue_payments=sum(1 for p in s.payments.values() if p.status == PaymentStatus.OVERDUE),
        )

    def _survey_progress(self, company_id: str, now: datetime) -> List[SurveyProgress]:
        rows = []
        for cycle in self.store.cycles.values():
            if cycle.company_id != company_id:
                continue
            survey = self.store.surveys.get(cycle.survey_id)
            if cycle.status == SurveyStatus.CLOSED or cycle.end_date < now:
                status = "closed"
            elif cycle.end_date - now <= CLOSING_SOON:
                status = "closing_soon"
            else:
                status = "open"
            rows.append(SurveyProgress(
                survey_id=cycle.survey_id,
                survey_title=survey.title if survey else cycle.survey_id,
                total_responses=cycle.response_count,
                expected_responses=cycle.target_count,
                deadline=cycle.end_date,
                status=status,
            ))
        return rows

    async def manager(self, user: User, now: Optional[datetime] = None) -> ManagerDashboard:
        await self.delay()
        now = now or utcnow()
        team = [
            e for e in self.store.employees.values()
            if e.company_id == user.company_id and (user.sector is None or e.sector == user.sector)
        ]
        active = sum(1 for e in team if e.is_active)

        # último relatorio listo que tenga datos del sector
        scores, alerts = {}, []
        responses = 0
        reports = sorted(
            (
                r for r in self.store.reports.values()
                if r.company_id == user.company_id
                and r.status == ReportStatus.READY and r.deleted_at is None
            ),
            key=lambda r: r.generated_at or r.created_at,
            reverse=True,
        )
        for report in reports:
            sector = next((s for s in report.data.sectors if s.sector == user.sector), None)
            if sector is not None:
                scores, alerts, responses = sector.average_scores, sector.alerts, sector.response_count
                break

        return ManagerDashboard(
            sector=user.sector,
            total_employees=len(team),
            active_employees=active,
            response_rate=round(responses / active * 100, 1) if active else 0,
            average_scores=scores,
            alerts=alerts,
            surveys=self._survey_progress(user.company_id, now),
        )

    async def employee(self, user: User, now: Optional[datetime] = None) -> EmployeeDashboard:
        await self.delay()
        now = now or utcnow()
        progress = self.store.progress.get(user.id)
        points = progress.total_points if progress else 0
        upcoming = next_level(points)

        pending = []
        for survey in self.store.surveys.values():
            if survey.company_id != user.company_id or survey.status != SurveyStatus.ACTIVE:
                continue
            cycle = next(
                (c for c in self.store.cycles.values()
                 if c.survey_id == survey.id and c.status == SurveyStatus.ACTIVE),
                None,
            )
            if cycle is None:
                continue
            pending.append(PendingSurvey(
                id=survey.id,
                title=survey.title,
                description=survey.description,
                deadline=cycle.end_date,
                days_remaining=max((cycle.end_date - now).days, 0),
                questions_count=len(survey.questions),
            ))

        return EmployeeDashboard(
            level=progress.level if progress else level_for(points).level,
            level_title=level_for(points).title,
            total_points=points,
            points_to_next_level=(upcoming.min_points - points) if upcoming else 0,
            completed_surveys=progress.surveys_completed if progress else 0,
            watched_videos=progress.videos_watched if progress else 0,
            quizzes_passed=progress.quizzes_completed if progress else 0,
            pending_surveys=pending,
            available_videos=sum(1 for v in self.store.videos.values() if v.is_active),
        )
