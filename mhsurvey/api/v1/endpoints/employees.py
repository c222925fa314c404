# mhsurvey/api/v1/endpoints/employees.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile
from fastapi.responses import PlainTextResponse

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import employee_service, get_pagination
from mhsurvey.core.exceptions import ValidationError
from mhsurvey.models.employee import Employee
from mhsurvey.schemas.admin import EmployeeIn, EmployeeUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.employees import EmployeeService, ImportResult
from mhsurvey.utils.csv_tools import (
    employee_row_mapper,
    generate_employee_csv_template,
    parse_csv_bytes,
)

router = APIRouter(tags=["admin/employees"], dependencies=[Depends(guard("admin.employees"))])


@router.get("/admin/employees", response_model=Page[Employee])
async def list_employees(
    company_id: Optional[str] = Query(None, alias="companyId"),
    sector: Optional[str] = Query(None),
    pagination: PaginationParams = Depends(get_pagination),
    service: EmployeeService = Depends(employee_service),
):
    if company_id and sector:
        return await service.get_by_sector(company_id, sector, pagination)
    if company_id:
        return await service.get_by_company(company_id, pagination)
    return await service.get_all(pagination)


@router.get("/admin/employees/import/template", response_class=PlainTextResponse)
def download_template():
    return PlainTextResponse(
        generate_employee_csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="template_funcionarios.csv"'},
    )


@router.post("/admin/employees/import", response_model=ImportResult)
async def import_employees_csv(
    file: UploadFile = File(..., description="CSV com cabeçalho: name,email,sector,position"),
    company_id: str = Query(..., alias="companyId"),
    dry_run: bool = Query(False, alias="dryRun", description="Se true, valida mas NÃO cria"),
    service: EmployeeService = Depends(employee_service),
):
    try:
        raw = await file.read()
    finally:
        await file.close()

    rows = parse_csv_bytes(raw, employee_row_mapper)
    if not rows:
        raise ValidationError("Arquivo CSV vazio")
    return await service.import_rows(company_id, rows, dry_run=dry_run)


@router.get("/admin/employees/{employee_id}", response_model=Employee)
async def get_employee(employee_id: str = Path(...), service: EmployeeService = Depends(employee_service)):
    return await service.get_by_id(employee_id)


@router.post("/admin/employees", response_model=Employee, status_code=201)
async def create_employee(payload: EmployeeIn, service: EmployeeService = Depends(employee_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/employees/{employee_id}", response_model=Employee)
async def update_employee(
    payload: EmployeeUpdate,
    employee_id: str = Path(...),
    service: EmployeeService = Depends(employee_service),
):
    return await service.update(employee_id, payload.model_dump(exclude_unset=True))


@router.delete("/admin/employees/{employee_id}", status_code=204)
async def delete_employee(employee_id: str = Path(...), service: EmployeeService = Depends(employee_service)):
    await service.delete(employee_id)
