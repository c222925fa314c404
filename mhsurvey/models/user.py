# mhsurvey/models/user.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from mhsurvey.models.base import Entity


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class User(Entity):
    email: str
    name: str
    role: Role
    company_id: str
    sector: Optional[str] = None
    position: Optional[str] = None
    is_active: bool = True
