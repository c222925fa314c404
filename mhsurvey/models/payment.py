# mhsurvey/models/payment.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from mhsurvey.models.base import Entity


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Payment(Entity):
    company_id: str
    amount: float
    currency: str = "BRL"
    status: PaymentStatus = PaymentStatus.PENDING
    due_date: datetime
    paid_at: Optional[datetime] = None
    description: str = ""
