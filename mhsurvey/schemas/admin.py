# mhsurvey/schemas/admin.py
"""
Payloads de entrada de las pantallas de administración.

Los ``*In`` se usan al crear; los ``*Update`` tienen todo opcional y el
endpoint envía solo lo recibido (``model_dump(exclude_unset=True)``).
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from mhsurvey.models.base import CamelModel
from mhsurvey.models.company import BusinessHours
from mhsurvey.models.payment import PaymentStatus
from mhsurvey.models.question import ScaleLabels
from mhsurvey.models.survey import SurveyStatus


# -------- empresas --------
class CompanyIn(CamelModel):
    name: str = Field(..., min_length=1)
    cnpj: str = Field(..., min_length=1)
    sector: str
    employee_count: int = Field(0, ge=0)
    business_hours: Optional[BusinessHours] = None


class CompanyUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    cnpj: Optional[str] = None
    sector: Optional[str] = None
    employee_count: Optional[int] = Field(None, ge=0)
    business_hours: Optional[BusinessHours] = None
    is_active: Optional[bool] = None


# -------- funcionarios --------
class EmployeeIn(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    company_id: str
    sector: str
    position: str


class EmployeeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    sector: Optional[str] = None
    position: Optional[str] = None
    is_active: Optional[bool] = None


# -------- preguntas --------
# Sin restricciones aquí: la forma se valida en QuestionService
class QuestionIn(CamelModel):
    text: str = ""
    type: Optional[str] = None
    category: str = ""
    options: Optional[List[str]] = None
    scale_min: Optional[int] = None
    scale_max: Optional[int] = None
    scale_labels: Optional[ScaleLabels] = None


class QuestionUpdate(CamelModel):
    text: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    options: Optional[List[str]] = None
    scale_min: Optional[int] = None
    scale_max: Optional[int] = None
    scale_labels: Optional[ScaleLabels] = None
    is_active: Optional[bool] = None


# -------- questionarios --------
class SurveyIn(CamelModel):
    title: str
    description: str = ""
    company_id: str
    questions: List[str] = Field(default_factory=list)
    start_date: datetime
    end_date: datetime
    reminder_frequency: int = Field(7, ge=1)
    min_responses: int = Field(10, ge=1)


class SurveyUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[str]] = None
    status: Optional[SurveyStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reminder_frequency: Optional[int] = Field(None, ge=1)
    min_responses: Optional[int] = Field(None, ge=1)


class SurveyStatusIn(CamelModel):
    status: SurveyStatus


# -------- videos --------
class VideoIn(CamelModel):
    title: str = ""
    description: str = ""
    url: str = ""
    duration: int = 0
    thumbnail: str = ""
    category: str
    quiz_id: Optional[str] = None
    points: int = Field(30, ge=0)


class VideoUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    duration: Optional[int] = None
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    quiz_id: Optional[str] = None
    points: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


# -------- pagamentos --------
class PaymentIn(CamelModel):
    company_id: str
    amount: float
    currency: str = "BRL"
    status: PaymentStatus = PaymentStatus.PENDING
    due_date: datetime
    description: str = ""


class PaymentUpdate(CamelModel):
    amount: Optional[float] = None
    currency: Optional[str] = None
    status: Optional[PaymentStatus] = None
    due_date: Optional[datetime] = None
    description: Optional[str] = None


# -------- configuración --------
class SettingsUpdate(CamelModel):
    business_hours: Optional[BusinessHours] = None
    allow_outside_hours: Optional[bool] = None
    enable_reminders: Optional[bool] = None
    reminder_frequency: Optional[int] = None
    min_responses_for_report: Optional[int] = None
    auto_generate_reports: Optional[bool] = None


class ToggleIn(CamelModel):
    allow: bool


# -------- relatorios --------
class GenerateReportIn(CamelModel):
    survey_id: str
    cycle_id: str
    sector: Optional[str] = None
