# mhsurvey/services/surveys.py
"""
Questionarios, ciclos de aplicación y respuestas de los funcionarios.

Reglas:
- el estado solo avanza: draft -> active -> closed
- borrar un questionario lo cierra (no se elimina)
- un ciclo solo se abre sobre un questionario activo
- una respuesta exige questionario activo, ciclo abierto y horario de
  funcionamiento de la empresa (salvo allow_outside_hours)
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from mhsurvey.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from mhsurvey.models.base import CamelModel, utcnow
from mhsurvey.models.question import Question, QuestionType
from mhsurvey.models.survey import (
    STATUS_ORDER,
    Answer,
    Survey,
    SurveyCycle,
    SurveyResponse,
    SurveyStatus,
)
from mhsurvey.models.user import User
from mhsurvey.services.base import (
    DeletePolicy,
    MockCrudService,
    Page,
    PaginationParams,
    generate_id,
    paginate,
)
from mhsurvey.services.gamification import ActivityKind, GamificationService
from mhsurvey.services.settings import SettingsService

logger = logging.getLogger(__name__)


class SurveyStats(CamelModel):
    total: int
    active: int
    draft: int
    closed: int


def check_transition(current: SurveyStatus, new: SurveyStatus) -> None:
    if STATUS_ORDER[SurveyStatus(new)] < STATUS_ORDER[current]:
        raise ValidationError(
            f"Transição de status inválida: {current.value} -> {SurveyStatus(new).value}"
        )


class SurveyService(MockCrudService[Survey]):
    model = Survey
    collection_name = "surveys"
    not_found_message = "Questionário não encontrado"
    delete_policy = DeletePolicy.STATUS

    def deleted_fields(self, current: Survey) -> Dict[str, Any]:
        return {"status": SurveyStatus.CLOSED}

    def _check_questions(self, ids: Sequence[str]) -> None:
        missing = [qid for qid in ids if qid not in self.store.questions]
        if missing:
            raise ValidationError(
                "Perguntas inexistentes no questionário", details={"questions": missing}
            )

    def validate_create(self, data: Dict[str, Any]) -> None:
        if not (data.get("title") or "").strip():
            raise ValidationError("O título é obrigatório")
        self._check_questions(data.get("questions") or [])

    def validate_update(self, current: Survey, data: Dict[str, Any]) -> None:
        if "status" in data:
            try:
                check_transition(current.status, data["status"])
            except ValueError:
                raise ValidationError("Status inválido") from None
        if "title" in data and not (data["title"] or "").strip():
            raise ValidationError("O título é obrigatório")
        if "questions" in data:
            self._check_questions(data["questions"] or [])

    # -------- consultas --------
    async def get_by_status(
        self, status: SurveyStatus, pagination: Optional[PaginationParams] = None
    ) -> Page[Survey]:
        await self.delay()
        return paginate([s for s in self.items.values() if s.status == status], pagination)

    async def get_by_company(
        self, company_id: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Survey]:
        await self.delay()
        return paginate([s for s in self.items.values() if s.company_id == company_id], pagination)

    async def get_questions(self, survey_id: str) -> List[Question]:
        """Preguntas del questionario en el orden definido (ignora las que ya no existen)."""
        await self.delay()
        survey = self._find(survey_id)
        return [self.store.questions[q] for q in survey.questions if q in self.store.questions]

    async def update_status(self, id: str, status: SurveyStatus) -> Survey:
        return await self.update(id, {"status": status})

    async def duplicate(self, id: str) -> Survey:
        await self.delay()
        original = self._find(id)
        data = original.model_dump(exclude={"id", "created_at", "updated_at"})
        data.update(title=f"{original.title} (Cópia)", status=SurveyStatus.DRAFT)
        return self._create_now(data)

    async def stats(self) -> SurveyStats:
        await self.delay()
        surveys = list(self.items.values())
        return SurveyStats(
            total=len(surveys),
            active=sum(1 for s in surveys if s.status == SurveyStatus.ACTIVE),
            draft=sum(1 for s in surveys if s.status == SurveyStatus.DRAFT),
            closed=sum(1 for s in surveys if s.status == SurveyStatus.CLOSED),
        )

    # -------- ciclos --------
    def _active_cycle(self, survey_id: str) -> Optional[SurveyCycle]:
        return next(
            (
                c for c in self.store.cycles.values()
                if c.survey_id == survey_id and c.status == SurveyStatus.ACTIVE
            ),
            None,
        )

    async def get_cycles(self, survey_id: str) -> List[SurveyCycle]:
        await self.delay()
        return [c for c in self.store.cycles.values() if c.survey_id == survey_id]

    async def get_active_cycle(self, survey_id: str) -> Optional[SurveyCycle]:
        await self.delay()
        return self._active_cycle(survey_id)

    async def create_cycle(self, survey_id: str) -> SurveyCycle:
        await self.delay()
        survey = self._find(survey_id)
        if survey.status != SurveyStatus.ACTIVE:
            raise ValidationError("Apenas questionários ativos podem iniciar um ciclo")
        if self._active_cycle(survey_id) is not None:
            raise ValidationError("Já existe um ciclo ativo para este questionário")

        target = sum(
            1 for e in self.store.employees.values()
            if e.company_id == survey.company_id and e.is_active
        )
        now = utcnow()
        cycle = SurveyCycle(
            id=generate_id(),
            survey_id=survey.id,
            company_id=survey.company_id,
            start_date=survey.start_date,
            end_date=survey.end_date,
            status=SurveyStatus.ACTIVE,
            response_count=0,
            target_count=target,
            created_at=now,
            updated_at=now,
        )
        self.store.cycles[cycle.id] = cycle
        logger.info("Ciclo %s aberto para o questionário %s (meta=%d)", cycle.id, survey.id, target)
        return cycle

    async def close_cycle(self, cycle_id: str) -> SurveyCycle:
        await self.delay()
        cycle = self.store.cycles.get(cycle_id)
        if cycle is None:
            raise NotFoundError("Ciclo não encontrado")
        closed = cycle.model_copy(update={"status": SurveyStatus.CLOSED, "updated_at": utcnow()})
        self.store.cycles[cycle_id] = closed
        return closed

    # -------- respuestas --------
    def _check_answer(self, question: Question, value: Any) -> None:
        if question.type == QuestionType.SCALE:
            if not isinstance(value, (int, float)) or not (
                question.scale_min <= value <= question.scale_max
            ):
                raise ValidationError(
                    f"Valor fora da escala na pergunta {question.id}",
                    details={"min": question.scale_min, "max": question.scale_max},
                )
        elif question.type == QuestionType.MULTIPLE_CHOICE:
            if value not in (question.options or []):
                raise ValidationError(f"Opção inválida na pergunta {question.id}")

    async def submit_response(
        self,
        survey_id: str,
        user: User,
        answers: List[Union[Answer, Dict[str, Any]]],
        now: Optional[datetime] = None,
    ) -> SurveyResponse:
        await self.delay()
        survey = self._find(survey_id)
        if survey.company_id != user.company_id:
            raise AuthorizationError("Questionário não disponível para sua empresa")
        if survey.status != SurveyStatus.ACTIVE:
            raise ValidationError("Questionário não está ativo")

        cycle = self._active_cycle(survey_id)
        if cycle is None:
            raise ValidationError("Nenhum ciclo ativo para este questionário")

        hours = SettingsService(self.store, delay_ms=0)
        if not hours.check_within_business_hours(survey.company_id, now):
            raise ValidationError("Fora do horário de funcionamento da empresa")

        if not answers:
            raise ValidationError("Nenhuma resposta enviada")
        try:
            parsed = [Answer.model_validate(a) for a in answers]
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, "Respostas inválidas") from None

        for answer in parsed:
            if answer.question_id not in survey.questions:
                raise ValidationError(
                    "Resposta para pergunta que não pertence ao questionário",
                    details={"questionId": answer.question_id},
                )
            question = self.store.questions.get(answer.question_id)
            if question is not None:
                self._check_answer(question, answer.value)

        submitted = now or utcnow()
        response = SurveyResponse(
            id=generate_id(),
            survey_id=survey.id,
            cycle_id=cycle.id,
            company_id=survey.company_id,
            sector=user.sector or "Geral",
            answers=parsed,
            submitted_at=submitted,
            created_at=submitted,
            updated_at=submitted,
        )
        self.store.responses[response.id] = response
        self.store.cycles[cycle.id] = cycle.model_copy(
            update={"response_count": cycle.response_count + 1, "updated_at": utcnow()}
        )
        GamificationService(self.store, delay_ms=0).award(user.id, ActivityKind.SURVEY)
        logger.info("Resposta registrada: questionário=%s ciclo=%s setor=%s",
                    survey.id, cycle.id, response.sector)
        return response
