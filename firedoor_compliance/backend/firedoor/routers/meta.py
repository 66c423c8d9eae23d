# backend/firedoor/routers/meta.py
from __future__ import annotations

from fastapi import APIRouter

from ..config import settings
from ..domain.compliance import CRITICAL_RULES, MINOR_RULES
from ..domain.scheduling import DEFAULT_CYCLE_MONTHS, FLAT_ENTRANCE_CYCLE_MONTHS, HIGH_RISE_HEIGHT_M

router = APIRouter(prefix="/meta", tags=["meta"])


def _rule_rows(rules) -> list[dict]:
    return [
        {
            "code": r.code,
            "field": r.field,
            "message": r.message,
            "fails_on": r.fails_on.value,
            "requires": r.requires.value if r.requires else None,
        }
        for r in rules
    ]


@router.get("/disclaimer", response_model=dict)
def disclaimer():
    return {
        "statement": "Inspection results are derived from the recorded checklist. "
        "Confidence scores are advisory only and do not determine compliance.",
    }


@router.get("/rules", response_model=dict)
def rules():
    """The rule tables in evaluation order, for audit."""
    return {
        "rules_version": settings.rules_version,
        "critical": _rule_rows(CRITICAL_RULES),
        "minor": _rule_rows(MINOR_RULES),
        "scheduling": {
            "flat_entrance_months": FLAT_ENTRANCE_CYCLE_MONTHS,
            "other_months": DEFAULT_CYCLE_MONTHS,
            "high_rise_height_m": HIGH_RISE_HEIGHT_M,
        },
    }
