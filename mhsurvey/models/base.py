# mhsurvey/models/base.py
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """JSON en camelCase (companyId, createdAt...), acepta también snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Entity(CamelModel):
    id: str
    created_at: datetime
    updated_at: datetime
