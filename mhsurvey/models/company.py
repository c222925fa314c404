# mhsurvey/models/company.py
from __future__ import annotations

from typing import Optional

from mhsurvey.models.base import CamelModel, Entity


class BusinessHours(CamelModel):
    start: str  # HH:MM
    end: str    # HH:MM
    timezone: str = "America/Sao_Paulo"


class Company(Entity):
    name: str
    cnpj: str
    sector: str
    employee_count: int = 0
    is_active: bool = True
    business_hours: Optional[BusinessHours] = None
