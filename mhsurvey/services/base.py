# mhsurvey/services/base.py
"""
Base de los servicios mock.

Cada servicio envuelve una colección del ``MemoryStore`` y expone la misma
interfaz CRUD (get_all / get_by_id / create / update / delete). Todas las
operaciones esperan un retardo artificial antes de tocar el store para
simular la latencia de red.
"""
from __future__ import annotations

import asyncio
import math
import random
import string
import time
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import NotFoundError, ValidationError
from mhsurvey.db.store import MemoryStore
from mhsurvey.models.base import CamelModel, Entity, utcnow

T = TypeVar("T", bound=Entity)
ItemT = TypeVar("ItemT")

_ID_ALPHABET = string.ascii_lowercase + string.digits
SERVER_FIELDS = {"id", "created_at", "updated_at"}


class PaginationParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_LIMIT, ge=1)


class Page(CamelModel, Generic[ItemT]):
    data: List[ItemT]
    total: int
    page: int
    limit: int
    total_pages: int


def paginate(items: Sequence[ItemT], params: Optional[PaginationParams] = None) -> Page[ItemT]:
    """Corta la lista según page/limit (por defecto 1 / DEFAULT_PAGE_LIMIT)."""
    params = params or PaginationParams()
    start = (params.page - 1) * params.limit
    end = start + params.limit
    return Page(
        data=list(items[start:end]),
        total=len(items),
        page=params.page,
        limit=params.limit,
        total_pages=math.ceil(len(items) / params.limit),
    )


def generate_id() -> str:
    """epoch en ms + sufijo aleatorio base36; único solo probabilísticamente."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


class DeletePolicy(str, Enum):
    SOFT = "soft"        # is_active = False
    STATUS = "status"    # transición de estado (cancelado / cerrado)
    HARD = "hard"        # se elimina del store


class MockCrudService(Generic[T]):
    model: ClassVar[Type[Entity]]
    collection_name: ClassVar[str]
    not_found_message: ClassVar[str] = "Registro não encontrado"
    delete_policy: ClassVar[DeletePolicy] = DeletePolicy.SOFT

    def __init__(self, store: MemoryStore, delay_ms: Optional[int] = None):
        self.store = store
        self.delay_ms = settings.MOCK_DELAY_MS if delay_ms is None else delay_ms

    # -------- helpers --------
    @property
    def items(self) -> Dict[str, T]:
        return self.store.collection(self.collection_name)

    async def delay(self, ms: Optional[int] = None) -> None:
        ms = self.delay_ms if ms is None else ms
        if ms > 0:
            await asyncio.sleep(ms / 1000)

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Acepta claves en camelCase o snake_case; devuelve snake_case."""
        by_alias = {f.alias: name for name, f in self.model.model_fields.items() if f.alias}
        return {by_alias.get(k, k): v for k, v in data.items()}

    def _build(self, record: Dict[str, Any]) -> T:
        try:
            return self.model.model_validate(record)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from None

    def _find(self, id: str) -> T:
        item = self.items.get(id)
        if item is None or not self.is_visible(item):
            raise NotFoundError(self.not_found_message)
        return item

    def is_visible(self, item: T) -> bool:
        return True

    def visible_items(self) -> List[T]:
        return [i for i in self.items.values() if self.is_visible(i)]

    # -------- validaciones (hooks) --------
    def validate_create(self, data: Dict[str, Any]) -> None:
        pass

    def validate_update(self, current: T, data: Dict[str, Any]) -> None:
        pass

    def defaults(self) -> Dict[str, Any]:
        if "is_active" in self.model.model_fields:
            return {"is_active": True}
        return {}

    # -------- CRUD --------
    async def get_all(self, pagination: Optional[PaginationParams] = None) -> Page[T]:
        await self.delay()
        return paginate(self.visible_items(), pagination)

    async def get_by_id(self, id: str) -> T:
        await self.delay()
        return self._find(id)

    async def create(self, data: Dict[str, Any]) -> T:
        await self.delay()
        return self._create_now(data)

    def _create_now(self, data: Dict[str, Any]) -> T:
        data = {k: v for k, v in self._normalize(data).items() if k not in SERVER_FIELDS}
        self.validate_create(data)
        now = utcnow()
        entity = self._build({
            **data,
            **self.defaults(),
            "id": generate_id(),
            "created_at": now,
            "updated_at": now,
        })
        self.items[entity.id] = entity
        return entity

    async def update(self, id: str, data: Dict[str, Any]) -> T:
        await self.delay()
        current = self._find(id)
        data = {k: v for k, v in self._normalize(data).items() if k not in SERVER_FIELDS}
        self.validate_update(current, data)
        updated = self._build({
            **current.model_dump(),
            **data,
            "id": current.id,
            "updated_at": utcnow(),
        })
        self.items[id] = updated
        return updated

    async def delete(self, id: str) -> None:
        await self.delay()
        current = self._find(id)
        if self.delete_policy == DeletePolicy.HARD:
            del self.items[id]
            return
        self.items[id] = current.model_copy(
            update={**self.deleted_fields(current), "updated_at": utcnow()}
        )

    def deleted_fields(self, current: T) -> Dict[str, Any]:
        """Campos que cambian al borrar (soft delete o transición de estado)."""
        return {"is_active": False}
