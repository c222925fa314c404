# mhsurvey/services/employees.py
"""
Servicio de funcionarios: CRUD con e-mail único y carga masiva desde CSV.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import Field

from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import ValidationError
from mhsurvey.models.base import CamelModel
from mhsurvey.models.employee import Employee, EmployeeImport
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_FIELDS = ("name", "email", "sector", "position")


class ImportRowError(CamelModel):
    row: int = Field(..., description="Número da linha (a partir de 1, sem contar o cabeçalho)")
    error: str
    data: EmployeeImport


class ImportResult(CamelModel):
    success: int = 0
    errors: List[ImportRowError] = Field(default_factory=list)
    dry_run: bool = False


def _norm_email(s: Optional[str]) -> str:
    return (s or "").strip().lower()


class EmployeeService(MockCrudService[Employee]):
    model = Employee
    collection_name = "employees"
    not_found_message = "Funcionário não encontrado"
    delete_policy = DeletePolicy.SOFT

    def _email_taken(self, email: Optional[str], exclude_id: Optional[str] = None) -> bool:
        """Unicidad case-insensitive entre funcionarios activos."""
        email = _norm_email(email)
        return any(
            e.is_active and e.id != exclude_id and _norm_email(e.email) == email
            for e in self.items.values()
        )

    @staticmethod
    def _strip_email(data: Dict[str, Any]) -> None:
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip()

    def validate_create(self, data: Dict[str, Any]) -> None:
        self._strip_email(data)
        if self._email_taken(data.get("email")):
            raise ValidationError("E-mail já cadastrado")

    def validate_update(self, current: Employee, data: Dict[str, Any]) -> None:
        self._strip_email(data)
        if data.get("email") and self._email_taken(data["email"], exclude_id=current.id):
            raise ValidationError("E-mail já cadastrado")

    async def create(self, data: Dict[str, Any]) -> Employee:
        employee = await super().create(data)
        # Simula el envío del e-mail con las credenciales
        logger.info("E-mail de boas-vindas enviado para: %s", employee.email)
        return employee

    async def get_by_company(
        self, company_id: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Employee]:
        await self.delay()
        return paginate([e for e in self.items.values() if e.company_id == company_id], pagination)

    async def get_by_sector(
        self, company_id: str, sector: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Employee]:
        await self.delay()
        return paginate(
            [e for e in self.items.values() if e.company_id == company_id and e.sector == sector],
            pagination,
        )

    def _row_error(self, emp: EmployeeImport) -> Optional[str]:
        if not all((getattr(emp, f) or "").strip() for f in REQUIRED_FIELDS):
            return "Campos obrigatórios faltando"
        if not EMAIL_RE.match(emp.email):
            return "E-mail inválido"
        if self._email_taken(emp.email):
            return "E-mail já cadastrado"
        return None

    async def import_rows(
        self,
        company_id: str,
        rows: List[Dict[str, Any]],
        dry_run: bool = False,
        delay_ms: Optional[int] = None,
    ) -> ImportResult:
        """
        Importa funcionarios (name,email,sector,position) fila por fila.
        Una fila inválida se reporta y se salta; las demás siguen.
        """
        await self.delay(settings.MOCK_IMPORT_DELAY_MS if delay_ms is None else delay_ms)

        result = ImportResult(dry_run=dry_run)
        seen_in_file: set[str] = set()

        for idx, raw in enumerate(rows, start=1):
            emp = EmployeeImport.model_validate(raw)
            error = self._row_error(emp)
            if error is None and _norm_email(emp.email) in seen_in_file:
                error = "E-mail duplicado no arquivo"
            if error:
                result.errors.append(ImportRowError(row=idx, error=error, data=emp))
                continue

            seen_in_file.add(_norm_email(emp.email))
            if dry_run:
                result.success += 1
                continue

            try:
                self._create_now({**emp.model_dump(), "company_id": company_id})
            except ValidationError as e:
                result.errors.append(ImportRowError(row=idx, error=e.message, data=emp))
                continue
            logger.info("E-mail de boas-vindas enviado para: %s", emp.email)
            result.success += 1

        logger.info(
            "Importación CSV empresa=%s: %d ok, %d errores (dry_run=%s)",
            company_id, result.success, len(result.errors), dry_run,
        )
        return result
