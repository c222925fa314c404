# mhsurvey/services/gamification.py
"""
Puntos, niveles y badges de los funcionarios.

Cada actividad suma puntos fijos; el nivel se recalcula con la tabla LEVELS
y al subir de nivel se otorga el badge correspondiente.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from mhsurvey.core.config import settings
from mhsurvey.db.store import MemoryStore
from mhsurvey.models.base import CamelModel, utcnow
from mhsurvey.models.video import Badge, GamificationProgress

logger = logging.getLogger(__name__)


class ActivityKind(str, Enum):
    VIDEO = "video"
    QUIZ = "quiz"
    SURVEY = "survey"


ACTIVITY_POINTS: Dict[ActivityKind, int] = {
    ActivityKind.VIDEO: 30,
    ActivityKind.QUIZ: 20,
    ActivityKind.SURVEY: 50,
}

# contador de GamificationProgress que incrementa cada actividad
_COUNTERS = {
    ActivityKind.VIDEO: "videos_watched",
    ActivityKind.QUIZ: "quizzes_completed",
    ActivityKind.SURVEY: "surveys_completed",
}


@dataclass(frozen=True)
class Level:
    level: int
    title: str
    min_points: int
    icon: str


LEVELS: List[Level] = [
    Level(1, "Iniciante", 0, "seedling"),
    Level(2, "Aprendiz", 101, "book"),
    Level(3, "Praticante", 251, "target"),
    Level(4, "Especialista", 501, "star"),
    Level(5, "Mestre", 1001, "crown"),
    Level(6, "Lenda", 2001, "trophy"),
]


def level_for(points: int) -> Level:
    current = LEVELS[0]
    for lvl in LEVELS:
        if points >= lvl.min_points:
            current = lvl
    return current


def next_level(points: int) -> Optional[Level]:
    for lvl in LEVELS:
        if lvl.min_points > points:
            return lvl
    return None


def level_badge(lvl: Level) -> Badge:
    return Badge(
        id=f"level-{lvl.level}",
        name=lvl.title,
        description=f"Alcançou o nível {lvl.title}",
        icon=lvl.icon,
        earned_at=utcnow(),
    )


class RankingEntry(CamelModel):
    rank: int
    user_id: str
    name: str
    points: int
    level: int


class GamificationService:
    def __init__(self, store: MemoryStore, delay_ms: Optional[int] = None):
        self.store = store
        self.delay_ms = settings.MOCK_DELAY_MS if delay_ms is None else delay_ms

    async def delay(self) -> None:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)

    def _progress(self, user_id: str) -> GamificationProgress:
        progress = self.store.progress.get(user_id)
        if progress is None:
            progress = GamificationProgress(user_id=user_id)
            self.store.progress[user_id] = progress
        return progress

    async def get_progress(self, user_id: str) -> GamificationProgress:
        await self.delay()
        return self._progress(user_id)

    def award(self, user_id: str, kind: ActivityKind, points: Optional[int] = None) -> GamificationProgress:
        """Suma puntos sin esperar el retardo; lo usan otros servicios."""
        kind = ActivityKind(kind)
        current = self._progress(user_id)
        total = current.total_points + (ACTIVITY_POINTS[kind] if points is None else points)
        lvl = level_for(total)

        badges = list(current.badges)
        if lvl.level > current.level:
            earned = {b.id for b in badges}
            for reached in LEVELS:
                if current.level < reached.level <= lvl.level and f"level-{reached.level}" not in earned:
                    badges.append(level_badge(reached))
            logger.info("Usuário %s subiu para o nível %s (%s)", user_id, lvl.level, lvl.title)

        counter = _COUNTERS[kind]
        updated = current.model_copy(update={
            "total_points": total,
            counter: getattr(current, counter) + 1,
            "level": max(current.level, lvl.level),
            "badges": badges,
        })
        self.store.progress[user_id] = updated
        return updated

    async def record_activity(
        self, user_id: str, kind: ActivityKind, points: Optional[int] = None
    ) -> GamificationProgress:
        await self.delay()
        return self.award(user_id, kind, points)

    async def ranking(self, company_id: Optional[str] = None, limit: int = 10) -> List[RankingEntry]:
        await self.delay()
        users = {acc.user.id: acc.user for acc in self.store.accounts.values()}
        rows = []
        for progress in self.store.progress.values():
            user = users.get(progress.user_id)
            if company_id and (user is None or user.company_id != company_id):
                continue
            rows.append((progress, user.name if user else progress.user_id))

        rows.sort(key=lambda r: r[0].total_points, reverse=True)
        return [
            RankingEntry(
                rank=i,
                user_id=p.user_id,
                name=name,
                points=p.total_points,
                level=p.level,
            )
            for i, (p, name) in enumerate(rows[:limit], start=1)
        ]
