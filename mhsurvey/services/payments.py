# mhsurvey/services/payments.py
from __future__ import annotations

from typing import Any, Dict, Optional

from mhsurvey.core.exceptions import ValidationError
from mhsurvey.models.base import CamelModel, utcnow
from mhsurvey.models.payment import Payment, PaymentStatus
from mhsurvey.services.base import DeletePolicy, MockCrudService, Page, PaginationParams, paginate


class PaymentStats(CamelModel):
    total: int
    paid: int
    pending: int
    overdue: int
    total_amount: float
    paid_amount: float


class PaymentService(MockCrudService[Payment]):
    model = Payment
    collection_name = "payments"
    not_found_message = "Pagamento não encontrado"
    delete_policy = DeletePolicy.STATUS  # borrar = cancelar

    def deleted_fields(self, current: Payment) -> Dict[str, Any]:
        return {"status": PaymentStatus.CANCELLED}

    def validate_create(self, data: Dict[str, Any]) -> None:
        amount = data.get("amount")
        if isinstance(amount, (int, float)) and amount <= 0:
            raise ValidationError("O valor deve ser maior que zero")

    def validate_update(self, current: Payment, data: Dict[str, Any]) -> None:
        self.validate_create(data)
        if current.status == PaymentStatus.CANCELLED and data.get("status") not in (
            None, PaymentStatus.CANCELLED, PaymentStatus.CANCELLED.value
        ):
            raise ValidationError("Pagamento cancelado não pode ser reaberto")

    async def get_by_company(
        self, company_id: str, pagination: Optional[PaginationParams] = None
    ) -> Page[Payment]:
        await self.delay()
        return paginate([p for p in self.items.values() if p.company_id == company_id], pagination)

    async def get_by_status(
        self, status: PaymentStatus, pagination: Optional[PaginationParams] = None
    ) -> Page[Payment]:
        await self.delay()
        return paginate([p for p in self.items.values() if p.status == status], pagination)

    async def mark_as_paid(self, id: str) -> Payment:
        current = self.items.get(id)
        if current is not None and current.status == PaymentStatus.CANCELLED:
            raise ValidationError("Pagamento cancelado não pode ser pago")
        return await self.update(id, {"status": PaymentStatus.PAID, "paid_at": utcnow()})

    async def stats(self) -> PaymentStats:
        await self.delay()
        payments = list(self.items.values())
        paid = [p for p in payments if p.status == PaymentStatus.PAID]
        return PaymentStats(
            total=len(payments),
            paid=len(paid),
            pending=sum(1 for p in payments if p.status == PaymentStatus.PENDING),
            overdue=sum(1 for p in payments if p.status == PaymentStatus.OVERDUE),
            total_amount=sum(p.amount for p in payments),
            paid_amount=sum(p.amount for p in paid),
        )
