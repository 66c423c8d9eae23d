# backend/firedoor/domain/confidence.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..models import FireDoor, InspectionRecord, InspectionResult
from .door_status import sort_latest_first

# Window used for the reliability factor.
HISTORY_WINDOW = 5

# FAIL inspections whose action text mentions one of these count as critical.
CRITICAL_KEYWORDS = ("critical", "urgent", "dangerous")

HIGH_THRESHOLD = 80
MEDIUM_THRESHOLD = 60

_REASONS = {
    "high": "High confidence: Recently inspected, strong reliability, excellent evidence",
    "medium": "Medium confidence: Good inspection record with some gaps",
    "low": "Low confidence: Limited recent data or concerning history",
}


@dataclass(frozen=True)
class Factor:
    key: str
    points: int
    max_points: int
    text: str


@dataclass(frozen=True)
class Confidence:
    level: str  # high | medium | low
    score: int
    reason: str
    breakdown: list[str] = field(default_factory=list)
    factors: list[Factor] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "level": self.level,
            "score": self.score,
            "reason": self.reason,
            "breakdown": list(self.breakdown),
            "factors": [f.__dict__ for f in self.factors],
        }


def _as_date(d) -> date:
    return d.date() if isinstance(d, datetime) else d


def _recency(days: int) -> Factor:
    if days < 60:
        return Factor("recency", 30, 30, "✓ Recently inspected (< 60 days)")
    if days < 180:
        return Factor("recency", 20, 30, "○ Inspected within cycle (< 6 months)")
    if days < 365:
        return Factor("recency", 10, 30, "○ Inspection aging (6-12 months)")
    return Factor("recency", 0, 30, "✗ Inspection overdue (> 12 months)")


def _reliability(recent: list[InspectionRecord]) -> Factor:
    passes = sum(1 for i in recent if i.result == InspectionResult.PASS)
    fails = sum(1 for i in recent if i.result == InspectionResult.FAIL)

    if len(recent) >= 3 and passes >= 3 and fails == 0:
        return Factor("reliability", 25, 25, "✓ Consistent pass history (3+ consecutive)")
    if passes > fails:
        return Factor("reliability", 15, 25, "○ Mostly passes with minor issues")
    if fails > passes:
        return Factor("reliability", 5, 25, "○ History of failures")
    return Factor("reliability", 10, 25, "○ Mixed inspection history")


def is_critical_fail(insp: InspectionRecord) -> bool:
    if insp.result != InspectionResult.FAIL or not insp.action_description:
        return False
    text = insp.action_description.lower()
    return any(k in text for k in CRITICAL_KEYWORDS)


def _severity(history: list[InspectionRecord]) -> Factor:
    latest = history[0]
    had_critical = any(is_critical_fail(i) for i in history)
    only_minor = all(
        i.result in (InspectionResult.PASS, InspectionResult.REQUIRES_ATTENTION) for i in history
    )
    latest_passed = latest.result == InspectionResult.PASS

    if not had_critical and only_minor:
        return Factor("severity", 20, 20, "✓ No critical defects in history")
    if not had_critical and latest_passed:
        return Factor("severity", 15, 20, "○ Only minor faults historically")
    if had_critical and latest_passed:
        return Factor("severity", 10, 20, "○ Past critical issues now resolved")
    return Factor("severity", 0, 20, "✗ Unresolved critical issues")


def _evidence(door: FireDoor, history: list[InspectionRecord]) -> Factor:
    has_certification = bool(door.certification_ref)
    # Certification documents count as photographic evidence too.
    has_photos = has_certification or any(
        i.photo_refs or "photo" in (i.action_description or "").lower() for i in history
    )
    has_notes = any(i.action_description or i.inspector_notes for i in history)

    if has_certification and has_photos and has_notes:
        return Factor("evidence", 15, 15, "✓ Complete evidence (photos + certification + notes)")
    if has_photos and has_notes:
        return Factor("evidence", 10, 15, "○ Good evidence (photos + notes)")
    if has_notes:
        return Factor("evidence", 5, 15, "○ Basic evidence (notes only)")
    return Factor("evidence", 0, 15, "✗ Limited evidence")


def is_stair_door(door: FireDoor) -> bool:
    return "STAIR" in door.door_type.value or "stair" in (door.location or "").lower()


def is_riser_door(door: FireDoor) -> bool:
    loc = (door.location or "").lower()
    return "RISER" in door.door_type.value or "riser" in loc or "electric" in loc


def _environment(door: FireDoor) -> Factor:
    height = door.building.height_m
    critical_location = is_stair_door(door) or is_riser_door(door)

    if height <= 11 and not critical_location:
        return Factor("environment", 10, 10, "✓ Low-risk environment (standard residential)")
    if (11 < height <= 18) or critical_location:
        return Factor(
            "environment", 7, 10, "○ Medium-risk environment (elevated building/critical location)"
        )
    return Factor("environment", 3, 10, "○ High-risk environment (tower block/critical infrastructure)")


def level_for(score: int) -> str:
    if score >= HIGH_THRESHOLD:
        return "high"
    if score >= MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def score_confidence(
    door: FireDoor,
    inspections: Iterable[InspectionRecord],
    as_of: Optional[date] = None,
) -> Confidence:
    """
    Advisory 0..100 confidence in a door's displayed status.

    Five additive factors:
      recency (30) + reliability (25) + severity pattern (20)
      + evidence (15) + environment (10)

    This is a display aid only. Compliance is decided by the evaluator.
    """
    history = sort_latest_first(inspections)
    if not history:
        return Confidence(
            level="low",
            score=0,
            reason="No inspection records",
            breakdown=["No inspection history available"],
        )

    today = _as_date(as_of or date.today())
    days = (today - _as_date(history[0].inspection_date)).days

    factors = [
        _recency(days),
        _reliability(history[:HISTORY_WINDOW]),
        _severity(history),
        _evidence(door, history),
        _environment(door),
    ]
    total = max(0, min(100, sum(f.points for f in factors)))
    level = level_for(total)

    return Confidence(
        level=level,
        score=total,
        reason=_REASONS[level],
        breakdown=[f.text for f in factors],
        factors=factors,
    )
