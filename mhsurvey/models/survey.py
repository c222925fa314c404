# mhsurvey/models/survey.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Union

from pydantic import Field, model_validator

from mhsurvey.models.base import CamelModel, Entity


class SurveyStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"


# draft -> active -> closed, nunca hacia atrás
STATUS_ORDER = {
    SurveyStatus.DRAFT: 0,
    SurveyStatus.ACTIVE: 1,
    SurveyStatus.CLOSED: 2,
}


class Survey(Entity):
    title: str
    description: str = ""
    company_id: str
    questions: List[str] = Field(default_factory=list)  # IDs de preguntas, en orden
    status: SurveyStatus = SurveyStatus.DRAFT
    start_date: datetime
    end_date: datetime
    reminder_frequency: int = 7  # días
    min_responses: int = 10

    @model_validator(mode="after")
    def check_dates(self) -> "Survey":
        if self.end_date < self.start_date:
            raise ValueError("A data de término deve ser posterior à data de início")
        return self


class SurveyCycle(Entity):
    survey_id: str
    company_id: str
    start_date: datetime
    end_date: datetime
    status: SurveyStatus = SurveyStatus.ACTIVE
    response_count: int = 0
    target_count: int = 0


class Answer(CamelModel):
    question_id: str
    value: Union[int, float, str]


class SurveyResponse(Entity):
    """Respuesta anonimizada: solo guarda el sector, nunca el funcionario."""
    survey_id: str
    cycle_id: str
    company_id: str
    sector: str
    answers: List[Answer]
    submitted_at: datetime
