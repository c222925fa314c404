# mhsurvey/models/video.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from mhsurvey.models.base import CamelModel, Entity


class Video(Entity):
    title: str
    description: str = ""
    url: str
    duration: int = 0  # segundos
    thumbnail: str = ""
    category: str
    quiz_id: Optional[str] = None
    points: int = 30
    is_active: bool = True


class QuizQuestion(CamelModel):
    id: str
    question: str
    options: List[str]
    correct_answer: int  # índice de la opción correcta


class Quiz(Entity):
    video_id: str
    questions: List[QuizQuestion]
    passing_score: int = 70  # porcentaje


class QuizResult(CamelModel):
    quiz_id: str
    score: float
    passed: bool
    correct: int
    total: int
    points_awarded: int = 0


class Badge(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    earned_at: datetime


class GamificationProgress(CamelModel):
    user_id: str
    total_points: int = 0
    videos_watched: int = 0
    quizzes_completed: int = 0
    surveys_completed: int = 0
    level: int = 1
    badges: List[Badge] = Field(default_factory=list)
