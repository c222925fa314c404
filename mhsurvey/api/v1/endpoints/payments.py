# mhsurvey/api/v1/endpoints/payments.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from mhsurvey.api.deps.guard import guard
from mhsurvey.api.deps.services import get_pagination, payment_service
from mhsurvey.models.payment import Payment, PaymentStatus
from mhsurvey.schemas.admin import PaymentIn, PaymentUpdate
from mhsurvey.services.base import Page, PaginationParams
from mhsurvey.services.payments import PaymentService, PaymentStats

router = APIRouter(tags=["admin/payments"], dependencies=[Depends(guard("admin.payments"))])


@router.get("/admin/payments", response_model=Page[Payment])
async def list_payments(
    status: Optional[PaymentStatus] = Query(None),
    company_id: Optional[str] = Query(None, alias="companyId"),
    pagination: PaginationParams = Depends(get_pagination),
    service: PaymentService = Depends(payment_service),
):
    if company_id:
        return await service.get_by_company(company_id, pagination)
    if status:
        return await service.get_by_status(status, pagination)
    return await service.get_all(pagination)


@router.get("/admin/payments/stats", response_model=PaymentStats)
async def payment_stats(service: PaymentService = Depends(payment_service)):
    return await service.stats()


@router.get("/admin/payments/{payment_id}", response_model=Payment)
async def get_payment(payment_id: str = Path(...), service: PaymentService = Depends(payment_service)):
    return await service.get_by_id(payment_id)


@router.post("/admin/payments", response_model=Payment, status_code=201)
async def create_payment(payload: PaymentIn, service: PaymentService = Depends(payment_service)):
    return await service.create(payload.model_dump())


@router.patch("/admin/payments/{payment_id}", response_model=Payment)
async def update_payment(
    payload: PaymentUpdate,
    payment_id: str = Path(...),
    service: PaymentService = Depends(payment_service),
):
    return await service.update(payment_id, payload.model_dump(exclude_unset=True))


@router.post("/admin/payments/{payment_id}/pay", response_model=Payment)
async def mark_payment_paid(payment_id: str = Path(...), service: PaymentService = Depends(payment_service)):
    return await service.mark_as_paid(payment_id)


@router.delete("/admin/payments/{payment_id}", status_code=204)
async def cancel_payment(payment_id: str = Path(...), service: PaymentService = Depends(payment_service)):
    await service.delete(payment_id)
