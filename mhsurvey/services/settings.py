# mhsurvey/services/settings.py
"""
Configuración por empresa: horario de funcionamiento y reglas de ciclo.
"""
from __future__ import annotations

import asyncio
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError as PydanticValidationError

from mhsurvey.core.config import settings as app_settings
from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.db.store import MemoryStore
from mhsurvey.models.base import utcnow
from mhsurvey.models.company import BusinessHours
from mhsurvey.models.settings import SystemSettings

HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
READONLY_FIELDS = {"id", "company_id", "created_at", "updated_at"}


def validate_business_hours(hours: BusinessHours) -> None:
    if not HHMM_RE.match(hours.start) or not HHMM_RE.match(hours.end):
        raise ValidationError("Horário deve estar no formato HH:MM")
    if hours.start >= hours.end:
        raise ValidationError("O horário de início deve ser anterior ao de término")
    try:
        ZoneInfo(hours.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Fuso horário inválido: {hours.timezone}") from None


def within_hours(hours: BusinessHours, now: Optional[datetime] = None) -> bool:
    """True si ``now`` (UTC por defecto, también si viene sin zona) cae dentro de [start, end] en la zona de la empresa."""
    now = now or utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)  # sin zona = UTC
    local = now.astimezone(ZoneInfo(hours.timezone))
    current = local.strftime("%H:%M")
    return hours.start <= current <= hours.end


class SettingsService:
    def __init__(self, store: MemoryStore, delay_ms: Optional[int] = None):
        self.store = store
        self.delay_ms = app_settings.MOCK_DELAY_MS if delay_ms is None else delay_ms

    async def delay(self) -> None:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)

    def _current(self, company_id: str) -> SystemSettings:
        current = self.store.settings.get(company_id)
        if current is not None:
            return current

        company = self.store.companies.get(company_id)
        if company is None:
            raise NotFoundError("Empresa não encontrada")
        now = utcnow()
        current = SystemSettings(
            id=f"settings-{company_id}",
            company_id=company_id,
            business_hours=company.business_hours or BusinessHours(start="08:00", end="18:00"),
            created_at=now,
            updated_at=now,
        )
        self.store.settings[company_id] = current
        return current

    def _save(self, current: SystemSettings, changes: Dict[str, Any]) -> SystemSettings:
        try:
            updated = SystemSettings.model_validate({
                **current.model_dump(),
                **changes,
                "updated_at": utcnow(),
            })
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, "Configuração inválida") from None
        self.store.settings[current.company_id] = updated
        return updated

    async def get_settings(self, company_id: str) -> SystemSettings:
        await self.delay()
        return self._current(company_id)

    async def update_settings(self, company_id: str, data: Dict[str, Any]) -> SystemSettings:
        await self.delay()
        current = self._current(company_id)
        changes = {k: v for k, v in data.items() if k not in READONLY_FIELDS}
        if "business_hours" in changes:
            try:
                hours = BusinessHours.model_validate(changes["business_hours"])
            except PydanticValidationError as e:
                raise ValidationError.from_pydantic(e, "Horário de funcionamento inválido") from None
            validate_business_hours(hours)
            changes["business_hours"] = hours
        for key in ("reminder_frequency", "min_responses_for_report"):
            if key in changes and changes[key] is not None and changes[key] < 1:
                raise ValidationError(f"{key} deve ser maior que zero")
        return self._save(current, changes)

    async def update_business_hours(self, company_id: str, hours: BusinessHours) -> SystemSettings:
        await self.delay()
        validate_business_hours(hours)
        return self._save(self._current(company_id), {"business_hours": hours})

    async def toggle_outside_hours(self, company_id: str, allow: bool) -> SystemSettings:
        await self.delay()
        return self._save(self._current(company_id), {"allow_outside_hours": allow})

    def check_within_business_hours(self, company_id: str, now: Optional[datetime] = None) -> bool:
        current = self._current(company_id)
        if current.allow_outside_hours:
            return True
        return within_hours(current.business_hours, now)

    async def is_within_business_hours(self, company_id: str, now: Optional[datetime] = None) -> bool:
        await self.delay()
        return self.check_within_business_hours(company_id, now)
