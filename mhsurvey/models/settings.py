# mhsurvey/models/settings.py
from __future__ import annotations

from mhsurvey.models.base import Entity
from mhsurvey.models.company import BusinessHours


class SystemSettings(Entity):
    company_id: str
    business_hours: BusinessHours
    allow_outside_hours: bool = False
    enable_reminders: bool = True
    reminder_frequency: int = 7  # días
    min_responses_for_report: int = 10
    auto_generate_reports: bool = True
