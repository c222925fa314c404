# mhsurvey/models/employee.py
from __future__ import annotations

from typing import Optional

from mhsurvey.models.base import CamelModel, Entity


class Employee(Entity):
    name: str
    email: str
    company_id: str
    sector: str
    position: str
    is_active: bool = True


class EmployeeImport(CamelModel):
    """Fila del CSV de funcionarios (name,email,sector,position)."""
    name: Optional[str] = None
    email: Optional[str] = None
    sector: Optional[str] = None
    position: Optional[str] = None
