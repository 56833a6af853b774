"""Financial report schemas.

Field aliases are the JSON names the reporting UI reads; dump with
``by_alias=True``.
"""

from pydantic import BaseModel, Field


class MonthlyTotal(BaseModel):
    """Revenue for one calendar month of one year."""

    month: str
    year: int
    total: float


class PeriodTotal(BaseModel):
    """A financial or calendar year with its per-month sums."""

    key: str
    total: float
    months: dict[str, float]


class YearBreakdown(BaseModel):
    year: str
    total: float
    months: dict[str, float]


class LocationBreakdown(BaseModel):
    location: str
    total: float
    years: list[YearBreakdown]


class ServiceTypeBreakdown(BaseModel):
    type: str
    total: float
    years: list[YearBreakdown]


class ServiceNameBreakdown(BaseModel):
    name: str
    total: float
    years: list[YearBreakdown]


class FinancialReport(BaseModel):
    """Revenue bucketed five ways; every breakdown sums to grand_total."""

    monthly: list[MonthlyTotal] = Field(default_factory=list)
    financial_year: list[PeriodTotal] = Field(default_factory=list, alias="financialYear")
    calendar_year: list[PeriodTotal] = Field(default_factory=list, alias="calendarYear")
    by_location: list[LocationBreakdown] = Field(default_factory=list, alias="byLocation")
    by_service_type: list[ServiceTypeBreakdown] = Field(default_factory=list, alias="byServiceType")
    by_service_name: list[ServiceNameBreakdown] = Field(default_factory=list, alias="byServiceName")
    grand_total: float = Field(default=0.0, alias="grandTotal")
    undated_count: int = Field(default=0, ge=0, alias="undatedCount", description="rows left out for a missing or unreadable date")

    class Config:
        populate_by_name = True
