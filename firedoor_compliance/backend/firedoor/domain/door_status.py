# backend/firedoor/domain/door_status.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from ..models import InspectionRecord, InspectionResult
from .scheduling import is_overdue

# Display labels keyed by stored result/status values.
STATUS_LABELS = {
    "PASS": "Compliant",
    "FAIL": "Non-Compliant",
    "REQUIRES_ATTENTION": "Requires Attention",
    "REQUIRES_ACTION": "Requires Attention",
    "PENDING": "Pending",
    "OVERDUE": "Overdue",
}


@dataclass(frozen=True)
class RiskLevel:
    level: str  # critical | minor | ok | unknown
    label: str


def _sort_key(i: InspectionRecord) -> datetime:
    d = i.inspection_date
    if isinstance(d, datetime):
        # Aware timestamps compare as UTC instants; naive ones are taken as UTC.
        if d.tzinfo is not None:
            d = d.astimezone(timezone.utc).replace(tzinfo=None)
        return d
    return datetime.combine(d, datetime.min.time())


def sort_latest_first(inspections: Iterable[InspectionRecord]) -> list[InspectionRecord]:
    """History ordered by inspection date, newest first (caller order is ignored)."""
    return sorted(inspections or [], key=_sort_key, reverse=True)


def latest_inspection(inspections: Iterable[InspectionRecord]) -> Optional[InspectionRecord]:
    rows = sort_latest_first(inspections)
    return rows[0] if rows else None


def current_status(inspections: Iterable[InspectionRecord]) -> Optional[InspectionResult]:
    latest = latest_inspection(inspections)
    return latest.result if latest else None


def status_label(status: Optional[str]) -> str:
    key = (getattr(status, "value", status) or "").strip().upper()
    return STATUS_LABELS.get(key, "Pending")


def risk_level(inspections: Iterable[InspectionRecord], as_of: Optional[date] = None) -> RiskLevel:
    """
    Priority:
      1) FAIL            -> critical
      2) next due passed -> critical (overdue)
      3) REQUIRES_ATTENTION -> minor
      4) PASS            -> ok
    """
    latest = latest_inspection(inspections)
    if latest is None:
        return RiskLevel("unknown", "Not Assessed")

    if latest.result == InspectionResult.FAIL:
        return RiskLevel("critical", "Critical")
    if is_overdue(latest.next_inspection_date, as_of):
        return RiskLevel("critical", "Overdue")
    if latest.result == InspectionResult.REQUIRES_ATTENTION:
        return RiskLevel("minor", "Minor Issues")
    if latest.result == InspectionResult.PASS:
        return RiskLevel("ok", "Compliant")
    return RiskLevel("unknown", "Pending")
