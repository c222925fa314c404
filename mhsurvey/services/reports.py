# mhsurvey/services/reports.py
"""
Relatorios agregados por ciclo.

``generate`` crea el relatorio en estado ``generating`` y la capa HTTP
programa ``complete_generation`` como tarea en segundo plano. Ese paso
agrega las respuestas guardadas del ciclo en promedios por sector (escala
0-10 por categoría) y deja el relatorio en ``ready`` o ``error``.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from collections import defaultdict
from typing import Any, Dict, List, Optional

from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.models.base import CamelModel, utcnow
from mhsurvey.models.question import Question, QuestionType
from mhsurvey.models.report import (
    Alert,
    ChartData,
    Insight,
    Report,
    ReportData,
    ReportStatus,
    SectorReport,
)
from mhsurvey.models.survey import SurveyResponse
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate
from mhsurvey.utils.csv_tools import objects_to_csv

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Setor", "Respostas", "Estresse", "Satisfação", "Burnout"]
PDF_PLACEHOLDER = b"PDF Content"
YES_VALUES = {"sim", "yes", "true", "1"}

# umbrales sobre la escala 0-10
STRESS_WARNING, STRESS_CRITICAL = 7.0, 8.5
BURNOUT_WARNING, BURNOUT_CRITICAL = 6.5, 8.0
SATISFACTION_WARNING = 4.0


class ReportStats(CamelModel):
    total: int
    ready: int
    generating: int
    error: int


def score_answer(question: Question, value: Any) -> Optional[float]:
    """Convierte una respuesta en un puntaje 0-10; None si no es numérica (texto)."""
    if question.type == QuestionType.SCALE:
        span = question.scale_max - question.scale_min
        return (float(value) - question.scale_min) / span * 10
    if question.type == QuestionType.YES_NO:
        return 10.0 if str(value).strip().lower() in YES_VALUES else 0.0
    if question.type == QuestionType.MULTIPLE_CHOICE:
        options = question.options or []
        if value not in options or len(options) < 2:
            return None
        return options.index(value) / (len(options) - 1) * 10
    return None


def sector_alerts(scores: Dict[str, float]) -> List[Alert]:
    alerts: List[Alert] = []
    stress = scores.get("stress")
    if stress is not None and stress >= STRESS_WARNING:
        level = "critical" if stress >= STRESS_CRITICAL else "warning"
        alerts.append(Alert(type="stress", level=level, message="Nível de estresse acima da média"))
    burnout = scores.get("burnout")
    if burnout is not None and burnout >= BURNOUT_WARNING:
        level = "critical" if burnout >= BURNOUT_CRITICAL else "warning"
        alerts.append(Alert(type="burnout", level=level, message="Alto risco de burnout detectado"))
    satisfaction = scores.get("satisfaction")
    if satisfaction is not None and satisfaction <= SATISFACTION_WARNING:
        alerts.append(Alert(type="dissatisfaction", level="warning",
                            message="Baixo índice de satisfação"))
    return alerts


def aggregate(
    responses: List[SurveyResponse],
    questions: Dict[str, Question],
    target_count: int,
) -> ReportData:
    by_sector: Dict[str, List[SurveyResponse]] = defaultdict(list)
    for r in responses:
        by_sector[r.sector].append(r)

    sectors: List[SectorReport] = []
    for sector, items in by_sector.items():
        totals: Dict[str, List[float]] = defaultdict(list)
        for r in items:
            for answer in r.answers:
                question = questions.get(answer.question_id)
                if question is None:
                    continue
                score = score_answer(question, answer.value)
                if score is not None:
                    totals[question.category].append(score)
        averages = {cat: round(sum(v) / len(v), 1) for cat, v in totals.items()}
        sectors.append(SectorReport(
            sector=sector,
            response_count=len(items),
            average_scores=averages,
            alerts=sector_alerts(averages),
        ))

    insights: List[Insight] = []
    for alert_type, category in (("stress", "stress"), ("burnout", "burnout")):
        critical = [s.sector for s in sectors
                    if any(a.type == alert_type and a.level == "critical" for a in s.alerts)]
        warning = [s.sector for s in sectors
                   if any(a.type == alert_type and a.level == "warning" for a in s.alerts)]
        if critical:
            insights.append(Insight(category=category, level="critical",
                                    message=f"Níveis críticos de {category} em: {', '.join(critical)}",
                                    affected_sectors=critical))
        elif warning:
            insights.append(Insight(category=category, level="high",
                                    message=f"Níveis elevados de {category} em: {', '.join(warning)}",
                                    affected_sectors=warning))

    charts = []
    if sectors:
        charts.append(ChartData(type="bar", title="Índice de Estresse por Setor", data={
            "labels": [s.sector for s in sectors],
            "datasets": [{"label": "Estresse",
                          "data": [s.average_scores.get("stress", 0) for s in sectors]}],
        }))

    rate = round(len(responses) / target_count * 100, 1) if target_count else 0
    return ReportData(
        total_responses=len(responses),
        response_rate=rate,
        sectors=sectors,
        insights=insights,
        charts=charts,
    )


def export_filename(report: Report, ext: str) -> str:
    """Nombre de archivo a partir del título, solo ASCII (para Content-Disposition)."""
    title = report.title or f"relatorio-{report.id}"
    ascii_title = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode()
    safe = re.sub(r'[\\/:*?"<>|]+', "-", ascii_title).strip() or f"relatorio-{report.id}"
    return f"{safe}.{ext}"


class ReportService(MockCrudService[Report]):
    model = Report
    collection_name = "reports"
    not_found_message = "Relatório não encontrado"
    delete_policy = DeletePolicy.SOFT

    def is_visible(self, item: Report) -> bool:
        return item.deleted_at is None

    def deleted_fields(self, current: Report) -> Dict[str, Any]:
        return {"deleted_at": utcnow()}

    def defaults(self) -> Dict[str, Any]:
        return {"deleted_at": None}

    # -------- consultas --------
    async def get_by_survey(
        self, survey_id: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Report]:
        await self.delay()
        return paginate([r for r in self.visible_items() if r.survey_id == survey_id], pagination)

    async def get_by_company(
        self, company_id: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Report]:
        await self.delay()
        return paginate([r for r in self.visible_items() if r.company_id == company_id], pagination)

    async def get_by_sector(
        self, company_id: str, sector: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Report]:
        """Relatorios del sector más los generales de la empresa."""
        await self.delay()
        return paginate(
            [
                r for r in self.visible_items()
                if r.company_id == company_id and (r.sector == sector or r.sector is None)
            ],
            pagination,
        )

    async def get_by_status(
        self, status: ReportStatus, pagination: Optional[PaginationParams] = None
    ) -> Page[Report]:
        await self.delay()
        return paginate([r for r in self.visible_items() if r.status == status], pagination)

    async def stats(self) -> ReportStats:
        await self.delay()
        reports = self.visible_items()
        return ReportStats(
            total=len(reports),
            ready=sum(1 for r in reports if r.status == ReportStatus.READY),
            generating=sum(1 for r in reports if r.status == ReportStatus.GENERATING),
            error=sum(1 for r in reports if r.status == ReportStatus.ERROR),
        )

    # -------- generación --------
    async def generate(self, survey_id: str, cycle_id: str, sector: Optional[str] = None) -> Report:
        await self.delay()
        survey = self.store.surveys.get(survey_id)
        if survey is None:
            raise NotFoundError("Questionário não encontrado")
        cycle = self.store.cycles.get(cycle_id)
        if cycle is None:
            raise NotFoundError("Ciclo não encontrado")
        if cycle.survey_id != survey_id:
            raise ValidationError("O ciclo não pertence a este questionário")

        title = f"{survey.title} - {sector or 'Geral'}"
        report = self._create_now({
            "survey_id": survey_id,
            "cycle_id": cycle_id,
            "company_id": survey.company_id,
            "sector": sector,
            "title": title,
            "status": ReportStatus.GENERATING,
        })
        logger.info("Relatório %s em geração (questionário=%s ciclo=%s)", report.id, survey_id, cycle_id)
        return report

    async def complete_generation(self, report_id: str, delay_ms: Optional[int] = None) -> Report:
        await self.delay(settings.REPORT_GENERATION_DELAY_MS if delay_ms is None else delay_ms)
        report = self._find(report_id)
        try:
            cycle = self.store.cycles.get(report.cycle_id)
            if cycle is None:
                raise NotFoundError("Ciclo não encontrado")
            responses = [
                r for r in self.store.responses.values()
                if r.cycle_id == report.cycle_id
                and (report.sector is None or r.sector == report.sector)
            ]
            data = aggregate(responses, self.store.questions, cycle.target_count)
        except Exception:
            logger.exception("Falha ao gerar relatório %s", report_id)
            failed = report.model_copy(update={"status": ReportStatus.ERROR, "updated_at": utcnow()})
            self.items[report_id] = failed
            return failed

        now = utcnow()
        ready = report.model_copy(update={
            "status": ReportStatus.READY,
            "data": data,
            "generated_at": now,
            "updated_at": now,
        })
        self.items[report_id] = ready
        logger.info("Relatório %s pronto (%d respostas)", report_id, data.total_responses)
        return ready

    # -------- exportación --------
    async def export_csv(self, report_id: str) -> str:
        await self.delay()
        report = self._find(report_id)
        rows = [
            {
                "Setor": s.sector,
                "Respostas": s.response_count,
                "Estresse": s.average_scores.get("stress", "-"),
                "Satisfação": s.average_scores.get("satisfaction", "-"),
                "Burnout": s.average_scores.get("burnout", "-"),
            }
            for s in report.data.sectors
        ]
        return objects_to_csv(rows, CSV_HEADERS)

    async def export_pdf(self, report_id: str) -> bytes:
        # contenido fijo: no se genera un PDF real
        await self.delay()
        self._find(report_id)
        return PDF_PLACEHOLDER
