# mhsurvey/models/question.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from mhsurvey.models.base import CamelModel, Entity


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"
    TEXT = "text"
    YES_NO = "yes_no"


class ScaleLabels(CamelModel):
    min: str
    max: str


class Question(Entity):
    text: str
    type: QuestionType
    category: str  # stress, satisfaction, burnout...
    options: Optional[List[str]] = None        # multiple_choice
    scale_min: Optional[int] = None            # scale
    scale_max: Optional[int] = None            # scale
    scale_labels: Optional[ScaleLabels] = None  # scale
    is_active: bool = True
