from datetime import datetime, timezone

import pytest

from mhsurvey.services.dashboard import DashboardService
from mhsurvey.services.reports import ReportService
from mhsurvey.services.surveys import SurveyService


@pytest.mark.asyncio
async def test_admin_totals(store):
    dashboard = await DashboardService(store).admin()

    assert dashboard.total_companies == 2
    assert dashboard.total_employees == 3
    assert dashboard.active_surveys == 1
    assert dashboard.ready_reports == 3
    assert (dashboard.pending_payments, dashboard.overdue_payments) == (1, 1)


@pytest.mark.parametrize(
    "now,status",
    [
        (datetime(2025, 1, 10, tzinfo=timezone.utc), "open"),
        (datetime(2025, 1, 30, tzinfo=timezone.utc), "closing_soon"),
        (datetime(2025, 2, 5, tzinfo=timezone.utc), "closed"),
    ],
)
@pytest.mark.asyncio
async def test_manager_survey_progress(store, manager_user, now, status):
    dashboard = await DashboardService(store).manager(manager_user, now=now)

    assert dashboard.sector == "Tecnologia"
    assert dashboard.total_employees == 2
    [progress] = dashboard.surveys
    assert progress.survey_id == "survey-1"
    assert progress.total_responses == 45
    assert progress.status == status


@pytest.mark.asyncio
async def test_manager_scores_from_latest_sector_report(store, manager_user, employee_user):
    now = datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)
    await SurveyService(store).submit_response(
        "survey-1", employee_user, [{"questionId": "q-1", "value": 1}], now=now
    )
    reports = ReportService(store)
    pending = await reports.generate("survey-1", "cycle-1")
    await reports.complete_generation(pending.id, delay_ms=0)

    dashboard = await DashboardService(store).manager(manager_user, now=now)

    assert dashboard.average_scores == {"stress": 0.0}
    assert dashboard.response_rate == 50.0


@pytest.mark.asyncio
async def test_employee_pending_surveys(store, employee_user):
    now = datetime(2025, 1, 21, 23, 59, 59, tzinfo=timezone.utc)
    dashboard = await DashboardService(store).employee(employee_user, now=now)

    assert dashboard.level_title == "Praticante"
    assert dashboard.points_to_next_level == 51
    [pending] = dashboard.pending_surveys
    assert pending.id == "survey-1"
    assert pending.days_remaining == 10
    assert pending.questions_count == 5
