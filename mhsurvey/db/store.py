# mhsurvey/db/store.py
"""
Almacén en memoria.

Un único ``MemoryStore`` se construye al arrancar la app y se inyecta en los
servicios (``Depends(get_store)`` en la capa HTTP). Cada colección es un dict
indexado por id que conserva el orden de inserción; nada sobrevive al proceso.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from fastapi import Request

from mhsurvey.models.company import Company
from mhsurvey.models.employee import Employee
from mhsurvey.models.payment import Payment
from mhsurvey.models.question import Question
from mhsurvey.models.report import Report
from mhsurvey.models.settings import SystemSettings
from mhsurvey.models.survey import Survey, SurveyCycle, SurveyResponse
from mhsurvey.models.user import User
from mhsurvey.models.video import GamificationProgress, Quiz, Video

logger = logging.getLogger(__name__)


@dataclass
class Account:
    """Cuenta de acceso: contraseña en claro (mock) + usuario."""
    password: str
    user: User


@dataclass
class MemoryStore:
    accounts: Dict[str, Account] = field(default_factory=dict)  # clave: email en minúsculas
    companies: Dict[str, Company] = field(default_factory=dict)
    employees: Dict[str, Employee] = field(default_factory=dict)
    questions: Dict[str, Question] = field(default_factory=dict)
    surveys: Dict[str, Survey] = field(default_factory=dict)
    cycles: Dict[str, SurveyCycle] = field(default_factory=dict)
    responses: Dict[str, SurveyResponse] = field(default_factory=dict)
    reports: Dict[str, Report] = field(default_factory=dict)
    videos: Dict[str, Video] = field(default_factory=dict)
    quizzes: Dict[str, Quiz] = field(default_factory=dict)
    payments: Dict[str, Payment] = field(default_factory=dict)
    settings: Dict[str, SystemSettings] = field(default_factory=dict)  # clave: company_id
    progress: Dict[str, GamificationProgress] = field(default_factory=dict)  # clave: user_id

    def collection(self, name: str) -> Dict:
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(f"Coleção desconhecida: {name}") from None

    def counts(self) -> Dict[str, int]:
        return {
            name: len(getattr(self, name))
            for name in self.__dataclass_fields__
        }


def build_store(seed: bool = True) -> MemoryStore:
    store = MemoryStore()
    if seed:
        from mhsurvey.db.seed import seed_store

        seed_store(store)
        logger.info("Store inicializado com dados de exemplo: %s", store.counts())
    return store


def get_store(request: Request) -> MemoryStore:
    """Dependency para FastAPI (equivalente a get_db); create_app deja el store en app.state"""
    return request.app.state.store
