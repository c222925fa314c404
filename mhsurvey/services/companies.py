# mhsurvey/services/companies.py
from __future__ import annotations

from typing import Optional

from mhsurvey.models.company import Company
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate


class CompanyService(MockCrudService[Company]):
    model = Company
    collection_name = "companies"
    not_found_message = "Empresa não encontrada"
    # Soft delete: los funcionarios y encuestas siguen apuntando a la empresa
    delete_policy = DeletePolicy.SOFT

    async def get_active(self, pagination: Optional[PaginationParams] = None) -> Page[Company]:
        await self.delay()
        return paginate([c for c in self.items.values() if c.is_active], pagination)
