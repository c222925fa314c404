from datetime import datetime, timezone

import pytest

from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.models.question import Question, QuestionType
from mhsurvey.models.report import ReportStatus
from mhsurvey.services.reports import (
    PDF_PLACEHOLDER,
    ReportService,
    export_filename,
    score_answer,
    sector_alerts,
)
from mhsurvey.services.surveys import SurveyService

IN_HOURS = datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(store) -> ReportService:
    return ReportService(store)


def test_score_answer_normalizes_to_ten(store):
    q1, q2, q5 = store.questions["q-1"], store.questions["q-2"], store.questions["q-5"]

    assert score_answer(q1, 1) == 0
    assert score_answer(q1, 10) == 10
    assert score_answer(q2, "Sim") == 10
    assert score_answer(q2, "não") == 0
    assert score_answer(q5, "Nunca") == 0
    assert score_answer(q5, "Sempre") == 10
    assert score_answer(q5, "Talvez") is None
    assert score_answer(store.questions["q-4"], "texto livre") is None


def test_score_answer_custom_scale():
    q = Question(
        id="q", text="?", type=QuestionType.SCALE, category="stress",
        scale_min=1, scale_max=5, scale_labels={"min": "a", "max": "b"},
        created_at=IN_HOURS, updated_at=IN_HOURS,
    )
    assert score_answer(q, 3) == 5


def test_sector_alerts_thresholds():
    alerts = sector_alerts({"stress": 9.0, "burnout": 7.0, "satisfaction": 3.0})
    assert [(a.type, a.level) for a in alerts] == [
        ("stress", "critical"),
        ("burnout", "warning"),
        ("dissatisfaction", "warning"),
    ]
    assert sector_alerts({"stress": 5.0, "burnout": 2.0, "satisfaction": 8.0}) == []


@pytest.mark.asyncio
async def test_generate_starts_in_generating(service):
    report = await service.generate("survey-1", "cycle-1")

    assert report.status == ReportStatus.GENERATING
    assert report.company_id == "company-1"
    assert report.title == "Pesquisa de Clima Organizacional Q1 2025 - Geral"


@pytest.mark.asyncio
async def test_generate_validates_survey_and_cycle(service):
    with pytest.raises(NotFoundError):
        await service.generate("survey-999", "cycle-1")
    with pytest.raises(NotFoundError):
        await service.generate("survey-1", "cycle-999")
    with pytest.raises(ValidationError):
        await service.generate("survey-1", "cycle-2")


@pytest.mark.asyncio
async def test_complete_generation_aggregates_responses(service, store, employee_user):
    surveys = SurveyService(store)
    await surveys.submit_response("survey-1", employee_user, [
        {"questionId": "q-1", "value": 10},
        {"questionId": "q-2", "value": "Sim"},
        {"questionId": "q-5", "value": "Sempre"},
    ], now=IN_HOURS)

    pending = await service.generate("survey-1", "cycle-1", sector="Tecnologia")
    report = await service.complete_generation(pending.id, delay_ms=0)

    assert report.status == ReportStatus.READY
    assert report.generated_at is not None
    assert report.data.total_responses == 1
    assert report.data.response_rate == 1.0
    sector = report.data.sectors[0]
    assert sector.sector == "Tecnologia"
    assert sector.average_scores == {"stress": 10.0, "satisfaction": 10.0, "burnout": 10.0}
    assert {a.type for a in sector.alerts} == {"stress", "burnout"}
    assert report.data.insights[0].level == "critical"


@pytest.mark.asyncio
async def test_complete_generation_marks_error(service, store):
    pending = await service.generate("survey-1", "cycle-1")
    del store.cycles["cycle-1"]

    report = await service.complete_generation(pending.id, delay_ms=0)

    assert report.status == ReportStatus.ERROR


@pytest.mark.asyncio
async def test_export_csv(service):
    lines = (await service.export_csv("report-1")).split("\n")

    assert lines[0] == "Setor,Respostas,Estresse,Satisfação,Burnout"
    assert lines[1] == "TI,20,6.5,7.2,5.8"
    assert len(lines) == 4


@pytest.mark.asyncio
async def test_export_pdf_placeholder(service):
    assert await service.export_pdf("report-2") == PDF_PLACEHOLDER


def test_export_filename_is_ascii(store):
    report = store.reports["report-1"]
    assert export_filename(report, "csv") == "Pesquisa de Clima Organizacional Q1 2025 - Geral.csv"

    report = report.model_copy(update={"title": "Satisfação: RH/TI"})
    assert export_filename(report, "pdf") == "Satisfacao- RH-TI.pdf"


@pytest.mark.asyncio
async def test_soft_delete_hides_report(service, store):
    await service.delete("report-2")

    assert store.reports["report-2"].deleted_at is not None
    with pytest.raises(NotFoundError):
        await service.get_by_id("report-2")
    assert "report-2" not in [r.id for r in (await service.get_all()).data]


@pytest.mark.asyncio
async def test_queries_and_stats(service):
    by_sector = await service.get_by_sector("company-1", "TI")
    by_company = await service.get_by_company("company-2")
    by_survey = await service.get_by_survey("survey-1")

    assert by_sector.total == 2
    assert [r.id for r in by_company.data] == ["report-3"]
    assert by_survey.total == 2

    stats = await service.stats()
    assert (stats.total, stats.ready, stats.generating, stats.error) == (3, 3, 0, 0)
