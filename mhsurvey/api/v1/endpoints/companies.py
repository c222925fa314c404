# mhsurvey/api/v1/endpoints/companies.py
from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import company_service, get_pagination
from mhsurvey.models.company import Company
from mhsurvey.schemas.admin import CompanyIn, CompanyUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.companies import CompanyService

router = APIRouter(tags=["admin/companies"], dependencies=[Depends(guard("admin.companies"))])


@router.get("/admin/companies", response_model=Page[Company])
async def list_companies(
    active: bool = Query(False, description="Apenas empresas ativas"),
    pagination: PaginationParams = Depends(get_pagination),
    service: CompanyService = Depends(company_service),
):
    if active:
        return await service.get_active(pagination)
    return await service.get_all(pagination)


@router.get("/admin/companies/{company_id}", response_model=Company)
async def get_company(
    company_id: str = Path(...),
    service: CompanyService = Depends(company_service),
):
    return await service.get_by_id(company_id)


@router.post("/admin/companies", response_model=Company, status_code=201)
async def create_company(payload: CompanyIn, service: CompanyService = Depends(company_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/companies/{company_id}", response_model=Company)
async def update_company(
    payload: CompanyUpdate,
    company_id: str = Path(...),
    service: CompanyService = Depends(company_service),
):
    return await service.update(company_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/companies/{company_id}", status_code=204)
async def delete_company(company_id: str = Path(...), service: CompanyService = Depends(company_service)):
    await service.delete(company_id)
