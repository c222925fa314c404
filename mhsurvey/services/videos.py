# mhsurvey/services/videos.py
"""
Biblioteca de videos y quizzes asociados.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.models.video import GamificationProgress, Quiz, QuizResult, Video
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate
from mhsurvey.services.gamification import ACTIVITY_POINTS, ActivityKind, GamificationService

logger = logging.getLogger(__name__)


class VideoService(MockCrudService[Video]):
    model = Video
    collection_name = "videos"
    not_found_message = "Vídeo não encontrado"
    delete_policy = DeletePolicy.SOFT

    def validate_create(self, data: Dict[str, Any]) -> None:
        if not (data.get("title") or "").strip():
            raise ValidationError("O título é obrigatório")
        if not (data.get("url") or "").strip():
            raise ValidationError("A URL do vídeo é obrigatória")
        duration = data.get("duration")
        if isinstance(duration, (int, float)) and duration < 0:
            raise ValidationError("A duração não pode ser negativa")

    def validate_update(self, current: Video, data: Dict[str, Any]) -> None:
        self.validate_create({**current.model_dump(), **data})

    async def get_active(self, pagination: Optional[PaginationParams] = None) -> Page[Video]:
        await self.delay()
        return paginate([v for v in self.items.values() if v.is_active], pagination)

    async def get_by_category(
        self, category: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Video]:
        await self.delay()
        return paginate(
            [v for v in self.items.values() if v.category == category and v.is_active],
            pagination,
        )

    async def get_categories(self) -> List[str]:
        await self.delay()
        return sorted({v.category for v in self.items.values()})

    # -------- visualización y quiz --------
    async def mark_watched(self, video_id: str, user_id: str) -> GamificationProgress:
        await self.delay()
        video = self._find(video_id)
        if not video.is_active:
            raise NotFoundError(self.not_found_message)
        return GamificationService(self.store, delay_ms=0).award(
            user_id, ActivityKind.VIDEO, points=video.points
        )

    def _quiz_for(self, video: Video) -> Quiz:
        quiz = self.store.quizzes.get(video.quiz_id) if video.quiz_id else None
        if quiz is None:
            raise NotFoundError("Quiz não encontrado")
        return quiz

    async def get_quiz(self, video_id: str) -> Quiz:
        await self.delay()
        return self._quiz_for(self._find(video_id))

    async def submit_quiz(self, video_id: str, user_id: str, answers: Dict[str, int]) -> QuizResult:
        """
        ``answers`` mapea id de pregunta -> índice de la opción elegida.
        Una pregunta sin respuesta cuenta como incorrecta.
        """
        await self.delay()
        quiz = self._quiz_for(self._find(video_id))

        unknown = set(answers) - {q.id for q in quiz.questions}
        if unknown:
            raise ValidationError("Respostas para perguntas inexistentes no quiz",
                                  details={"questions": sorted(unknown)})

        correct = sum(1 for q in quiz.questions if answers.get(q.id) == q.correct_answer)
        total = len(quiz.questions)
        score = round(correct / total * 100, 1) if total else 0
        passed = score >= quiz.passing_score

        points = 0
        if passed:
            GamificationService(self.store, delay_ms=0).award(user_id, ActivityKind.QUIZ)
            points = ACTIVITY_POINTS[ActivityKind.QUIZ]
        logger.info("Quiz %s usuário=%s: %d/%d (aprovado=%s)", quiz.id, user_id, correct, total, passed)
        return QuizResult(
            quiz_id=quiz.id,
            score=score,
            passed=passed,
            correct=correct,
            total=total,
            points_awarded=points,
        )
