# mhsurvey/models/report.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from mhsurvey.models.base import CamelModel, Entity


class ReportStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class Alert(CamelModel):
    type: Literal["stress", "burnout", "dissatisfaction"]
    level: Literal["warning", "critical"]
    message: str


class SectorReport(CamelModel):
    sector: str
    response_count: int = 0
    average_scores: Dict[str, float] = Field(default_factory=dict)
    alerts: List[Alert] = Field(default_factory=list)


class Insight(CamelModel):
    category: str
    level: Literal["low", "medium", "high", "critical"]
    message: str
    affected_sectors: List[str] = Field(default_factory=list)


class ChartData(CamelModel):
    type: Literal["bar", "line", "pie", "radar"]
    title: str
    data: Any = None
    options: Any = None


class ReportData(CamelModel):
    total_responses: int = 0
    response_rate: float = 0
    sectors: List[SectorReport] = Field(default_factory=list)
    insights: List[Insight] = Field(default_factory=list)
    charts: List[ChartData] = Field(default_factory=list)


class Report(Entity):
    survey_id: str
    cycle_id: str
    company_id: str
    sector: Optional[str] = None  # None = relatório geral
    title: str = ""
    status: ReportStatus = ReportStatus.PENDING
    data: ReportData = Field(default_factory=ReportData)
    generated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
