"""Revenue reporting over a user's appointments.

Appointments are bucketed by UK financial year (6 April to 5 April), calendar
year, location, service type and service name, each with a month-level
breakdown. Amounts are summed as Decimal and rounded to pence on output.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.appointment_repo import AppointmentRepository
from app.schemas.financial import (
    FinancialReport,
    LocationBreakdown,
    MonthlyTotal,
    PeriodTotal,
    ServiceNameBreakdown,
    ServiceTypeBreakdown,
    YearBreakdown,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
# Month order inside a financial year: April first
FINANCIAL_YEAR_MONTHS = MONTH_NAMES[3:] + MONTH_NAMES[:3]
# (month, day) on which a UK tax year starts
TAX_YEAR_START = (4, 6)
UNKNOWN_LABEL = "Unknown"

_ZERO = Decimal("0")
_PENNY = Decimal("0.01")


def financial_year_start(day: date) -> int:
    """Calendar year in which the tax year containing ``day`` began."""
    if (day.month, day.day) >= TAX_YEAR_START:
        return day.year
    return day.year - 1


def _financial_year_label(start: int) -> str:
    return f"{start}-{(start + 1) % 100:02d}"


def financial_year_key(day: date) -> str:
    """Tax-year label for ``day``: 2024-04-05 -> "2023-24", 2024-04-06 -> "2024-25"."""
    return _financial_year_label(financial_year_start(day))


def _to_money(amount: Decimal) -> float:
    return float(amount.quantize(_PENNY, rounding=ROUND_HALF_UP))


def _coerce_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _coerce_price(value: Any) -> Optional[Decimal]:
    """Price as Decimal; None counts as zero, unreadable values return None."""
    if value is None:
        return _ZERO
    if isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def _label(value: Any) -> str:
    if value is None:
        return UNKNOWN_LABEL
    text = str(value).strip()
    return text or UNKNOWN_LABEL


@dataclass
class _MonthBucket:
    total: Decimal = _ZERO
    months: dict[str, Decimal] = field(default_factory=lambda: defaultdict(lambda: _ZERO))

    def add(self, month: str, amount: Decimal) -> None:
        self.total += amount
        self.months[month] += amount

    def months_in(self, order: Iterable[str]) -> dict[str, float]:
        return {m: _to_money(self.months[m]) for m in order if m in self.months}


@dataclass
class _DimensionBucket:
    total: Decimal = _ZERO
    years: dict[int, _MonthBucket] = field(default_factory=lambda: defaultdict(_MonthBucket))

    def add(self, year: int, month: str, amount: Decimal) -> None:
        self.total += amount
        self.years[year].add(month, amount)

    def year_breakdowns(self) -> list[YearBreakdown]:
        return [
            YearBreakdown(
                year=str(year),
                total=_to_money(bucket.total),
                months=bucket.months_in(MONTH_NAMES),
            )
            for year, bucket in sorted(self.years.items())
        ]


def _ranked(buckets: dict[str, _DimensionBucket]) -> list[tuple[str, _DimensionBucket]]:
    # Highest revenue first; equal totals fall back to name order so output is stable
    return sorted(buckets.items(), key=lambda item: (-item[1].total, item[0]))


def aggregate(
    appointments: Iterable[Any],
    include_paid: bool = True,
    include_unpaid: bool = False,
) -> FinancialReport:
    """
    Build a FinancialReport from appointment rows.

    Each row needs ``date``, ``price``, ``paid``, ``location``, ``type`` and
    ``service`` attributes. Rows are kept when ``(include_paid and paid) or
    (include_unpaid and not paid)``. The input is only read.

    Dirty data never fails the report:
    - a missing price counts as 0, an unreadable one counts as 0 and is logged
    - a missing or unreadable date leaves the row out of every breakdown and
      out of the grand total; such rows are counted in ``undated_count``

    Args:
        appointments: Appointment rows (ORM objects or anything with those attributes)
        include_paid: Keep rows marked paid
        include_unpaid: Keep rows not marked paid

    Returns:
        FinancialReport whose five breakdowns each sum to grand_total
    """
    if not include_paid and not include_unpaid:
        return FinancialReport()

    financial_years: dict[int, _MonthBucket] = defaultdict(_MonthBucket)
    calendar_years: dict[int, _MonthBucket] = defaultdict(_MonthBucket)
    monthly: dict[tuple[int, int], Decimal] = defaultdict(lambda: _ZERO)
    by_location: dict[str, _DimensionBucket] = defaultdict(_DimensionBucket)
    by_type: dict[str, _DimensionBucket] = defaultdict(_DimensionBucket)
    by_name: dict[str, _DimensionBucket] = defaultdict(_DimensionBucket)
    grand_total = _ZERO
    undated = 0

    for appointment in appointments:
        paid = bool(getattr(appointment, "paid", False))
        if not ((include_paid and paid) or (include_unpaid and not paid)):
            continue

        day = _coerce_date(getattr(appointment, "date", None))
        if day is None:
            undated += 1
            continue

        amount = _coerce_price(getattr(appointment, "price", None))
        if amount is None:
            logger.warning(
                "Appointment %s has a non-numeric price %r; counting it as 0",
                getattr(appointment, "id", None),
                getattr(appointment, "price", None),
            )
            amount = _ZERO

        month = MONTH_NAMES[day.month - 1]
        financial_years[financial_year_start(day)].add(month, amount)
        calendar_years[day.year].add(month, amount)
        monthly[(day.year, day.month)] += amount
        by_location[_label(getattr(appointment, "location", None))].add(day.year, month, amount)
        by_type[_label(getattr(appointment, "type", None))].add(day.year, month, amount)
        by_name[_label(getattr(appointment, "service", None))].add(day.year, month, amount)
        grand_total += amount

    if undated:
        logger.warning("Left %d appointment(s) without a usable date out of the financial report", undated)

    return FinancialReport(
        monthly=[
            MonthlyTotal(month=MONTH_NAMES[month - 1], year=year, total=_to_money(total))
            for (year, month), total in sorted(monthly.items())
        ],
        financial_year=[
            PeriodTotal(
                key=_financial_year_label(start),
                total=_to_money(bucket.total),
                months=bucket.months_in(FINANCIAL_YEAR_MONTHS),
            )
            for start, bucket in sorted(financial_years.items())
        ],
        calendar_year=[
            PeriodTotal(
                key=str(year),
                total=_to_money(bucket.total),
                months=bucket.months_in(MONTH_NAMES),
            )
            for year, bucket in sorted(calendar_years.items())
        ],
        by_location=[
            LocationBreakdown(location=name, total=_to_money(bucket.total), years=bucket.year_breakdowns())
            for name, bucket in _ranked(by_location)
        ],
        by_service_type=[
            ServiceTypeBreakdown(type=name, total=_to_money(bucket.total), years=bucket.year_breakdowns())
            for name, bucket in _ranked(by_type)
        ],
        by_service_name=[
            ServiceNameBreakdown(name=name, total=_to_money(bucket.total), years=bucket.year_breakdowns())
            for name, bucket in _ranked(by_name)
        ],
        grand_total=_to_money(grand_total),
        undated_count=undated,
    )


class FinancialService:
    """Service for the revenue report endpoint."""

    @staticmethod
    async def get_report(
        db: AsyncSession,
        user_id: int,
        include_paid: bool = True,
        include_unpaid: bool = False,
    ) -> FinancialReport:
        if not include_paid and not include_unpaid:
            return FinancialReport()
        appointments = await AppointmentRepository.list_for_user(db, user_id)
        return aggregate(appointments, include_paid=include_paid, include_unpaid=include_unpaid)
