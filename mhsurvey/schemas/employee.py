from typing import Dict, List

from pydantic import Field

from mhsurvey.models.base import CamelModel
from mhsurvey.models.question import Question
from mhsurvey.models.survey import Answer, Survey


class SurveyFormOut(CamelModel):
    survey: Survey
    questions: List[Question]
    within_business_hours: bool


class SurveySubmitIn(CamelModel):
    answers: List[Answer] = Field(default_factory=list)


class QuizSubmitIn(CamelModel):
    answers: Dict[str, int] = Field(default_factory=dict)  # id de pregunta -> índice elegido
