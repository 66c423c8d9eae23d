# backend/firedoor/domain/compliance/defect_mapping.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...models import (
    Answer,
    ChecklistAnswers,
    Defect,
    DefectPriority,
    DefectSeverity,
    DoorFeature,
    FireDoor,
    InspectionResult,
)

TICKET_PREFIX = "DEF"

PRIORITY_BY_SEVERITY: dict[DefectSeverity, DefectPriority] = {
    DefectSeverity.CRITICAL: DefectPriority.URGENT,
    DefectSeverity.MAJOR: DefectPriority.HIGH,
    DefectSeverity.MINOR: DefectPriority.MEDIUM,
}


@dataclass(frozen=True)
class DefectRule:
    field: str
    category: str
    description: str
    severity: DefectSeverity
    fails_on: Answer = Answer.NO
    requires: Optional[DoorFeature] = None


@dataclass(frozen=True)
class DefectDraft:
    category: str
    description: str
    severity: DefectSeverity
    priority: DefectPriority

    def as_dict(self) -> dict:
        return {
            "category": self.category,
            "description": self.description,
            "severity": self.severity.value,
            "priority": self.priority.value,
        }


# Order matters: drafts come out in this order.
DEFECT_RULES: tuple[DefectRule, ...] = (
    DefectRule(
        "door_leaf_frame_same_rating",
        "Door & Frame Rating",
        "Door leaf and frame do not have the same fire rating. This is a critical safety violation.",
        DefectSeverity.CRITICAL,
    ),
    DefectRule(
        "door_closes_completely",
        "Door Operation",
        "Door does not close completely. Fire door must close fully to provide fire resistance.",
        DefectSeverity.CRITICAL,
    ),
    DefectRule(
        "door_closes_from_any_angle",
        "Door Operation",
        "Door does not close from any angle. Self-closing mechanism is faulty or missing.",
        DefectSeverity.CRITICAL,
    ),
    # Inverted storage: YES means gaps exceed 4mm.
    DefectRule(
        "frame_gaps_acceptable",
        "Frame Gaps",
        "Frame gaps exceed 4mm (measured: {max_gap}). Excessive gaps compromise fire resistance.",
        DefectSeverity.CRITICAL,
        fails_on=Answer.YES,
    ),
    DefectRule(
        "hinges_secure",
        "Hinges",
        "Hinges are not secure or properly fixed. This affects door closure and fire resistance.",
        DefectSeverity.MAJOR,
    ),
    DefectRule(
        "intumescent_strips_intact",
        "Intumescent Strips",
        "Intumescent strips are damaged, missing, or not intact. These are essential for fire resistance.",
        DefectSeverity.MAJOR,
        requires=DoorFeature.INTUMESCENT_STRIPS,
    ),
    DefectRule(
        "smoke_seals_intact",
        "Smoke Seals",
        "Smoke seals are damaged or missing. Smoke seals prevent smoke spread during a fire.",
        DefectSeverity.MAJOR,
        requires=DoorFeature.SMOKE_SEAL,
    ),
    DefectRule(
        "door_signage_correct",
        "Signage",
        "Fire door signage is missing, damaged, or incorrect. Proper signage is required by regulations.",
        DefectSeverity.MINOR,
    ),
    DefectRule(
        "letterbox_closes_properly",
        "Letterbox",
        "Letterbox does not close properly. Letterbox must be fire-rated and self-closing.",
        DefectSeverity.MAJOR,
        requires=DoorFeature.LETTERBOX,
    ),
    DefectRule(
        "glazing_intact",
        "Glazing",
        "Fire-rated glazing is damaged or not intact. Glazing must maintain fire resistance rating.",
        DefectSeverity.CRITICAL,
        requires=DoorFeature.GLAZING,
    ),
    DefectRule(
        "air_transfer_grille_intact",
        "Air Transfer Grille",
        "Air transfer grille is damaged or not properly fitted. Must be fire-rated and secure.",
        DefectSeverity.MAJOR,
        requires=DoorFeature.AIR_TRANSFER_GRILLE,
    ),
)


def _draft(category: str, description: str, severity: DefectSeverity) -> DefectDraft:
    return DefectDraft(
        category=category,
        description=description,
        severity=severity,
        priority=PRIORITY_BY_SEVERITY[severity],
    )


def _fmt_gap(v: Optional[float]) -> str:
    if v is None:
        return "unknown"
    return f"{v:g}mm"


def plan_defects(
    door: FireDoor,
    answers: ChecklistAnswers,
    result: InspectionResult,
) -> list[DefectDraft]:
    """
    Remediation work items for a non-pass inspection.

    PASS produces nothing. Feature-gated checks are skipped for doors
    without the feature.
    """
    if result not in (InspectionResult.FAIL, InspectionResult.REQUIRES_ATTENTION):
        return []

    drafts: list[DefectDraft] = []

    if not (answers.door_construction or "").strip():
        drafts.append(
            _draft(
                "Door Construction",
                "Door construction type not specified or incorrect. "
                "Fire door must have proper construction certification.",
                DefectSeverity.CRITICAL,
            )
        )

    for rule in DEFECT_RULES:
        if rule.requires is not None and not door.has(rule.requires):
            continue
        if getattr(answers, rule.field) != rule.fails_on:
            continue
        desc = rule.description.format(max_gap=_fmt_gap(answers.max_gap_size_mm))
        drafts.append(_draft(rule.category, desc, rule.severity))

    damage = (answers.damage_description or "").strip()
    if answers.damage_or_defects == Answer.YES and damage:
        drafts.append(
            _draft("Damage/Defects", f"Physical damage detected: {damage}", DefectSeverity.MAJOR)
        )

    return drafts


def next_ticket_number(last_ticket: Optional[str], today: Optional[date] = None) -> str:
    """
    DEF-YYYYMMDD-NNNN. The sequence restarts every day; a last ticket from
    another day (or an unparseable one) starts a new sequence at 0001.
    """
    today = today or date.today()
    day = today.strftime("%Y%m%d")
    prefix = f"{TICKET_PREFIX}-{day}-"

    seq = 1
    if last_ticket and last_ticket.startswith(prefix):
        try:
            seq = int(last_ticket.rsplit("-", 1)[1]) + 1
        except ValueError:
            seq = 1

    return f"{prefix}{seq:04d}"


def build_defects(
    drafts: list[DefectDraft],
    *,
    door_id: str,
    inspection_id: str,
    last_ticket: Optional[str] = None,
    today: Optional[date] = None,
) -> list[Defect]:
    """Open Defect records with consecutive ticket numbers."""
    out: list[Defect] = []
    ticket = last_ticket
    for d in drafts:
        ticket = next_ticket_number(ticket, today)
        out.append(
            Defect(
                id=ticket,
                ticket_number=ticket,
                door_id=door_id,
                inspection_id=inspection_id,
                category=d.category,
                description=d.description,
                severity=d.severity,
                priority=d.priority,
            )
        )
    return out
