# backend/firedoor/domain/compliance/evaluator.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...models import (
    ChecklistAnswers,
    DateLike,
    DoorFeature,
    FireDoor,
    InspectionResult,
    InspectionStatus,
)
from ..scheduling import next_inspection_date
from .checklist import CRITICAL_RULES, MINOR_RULES, ChecklistRule, failed_rules

# Ordered top-down; the first group with a matching rule decides the result.
RULE_GROUPS: tuple[tuple[InspectionResult, tuple[ChecklistRule, ...]], ...] = (
    (InspectionResult.FAIL, CRITICAL_RULES),
    (InspectionResult.REQUIRES_ATTENTION, MINOR_RULES),
)

_PRIORITY_BY_RESULT = {
    InspectionResult.FAIL: "HIGH",
    InspectionResult.REQUIRES_ATTENTION: "MEDIUM",
}


@dataclass(frozen=True)
class Evaluation:
    result: InspectionResult
    action_items: list[str] = field(default_factory=list)
    failed_codes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class InspectionOutcome:
    result: InspectionResult
    action_items: list[str]
    action_required: bool
    action_description: Optional[str]
    priority: Optional[str]
    status: InspectionStatus
    next_inspection_date: DateLike

    def as_dict(self) -> dict:
        return {
            "result": self.result.value,
            "action_items": list(self.action_items),
            "action_required": self.action_required,
            "action_description": self.action_description,
            "priority": self.priority,
            "status": self.status.value,
            "next_inspection_date": self.next_inspection_date.isoformat(),
        }


def evaluate(
    answers: ChecklistAnswers,
    features: Iterable[DoorFeature] = (),
    access_denied: Optional[bool] = None,
) -> Evaluation:
    """
    Overall result for a completed checklist.

    Priority:
      1) access denied -> PASS, nothing to action
      2) any critical rule -> FAIL
      3) any minor rule -> REQUIRES_ATTENTION
      4) PASS

    Feature-gated rules are skipped when the door lacks the feature.
    """
    denied = answers.access_denied if access_denied is None else bool(access_denied)
    if denied:
        return Evaluation(result=InspectionResult.PASS)

    feats = frozenset(features)
    for result, rules in RULE_GROUPS:
        hits = failed_rules(rules, answers, feats)
        if hits:
            return Evaluation(
                result=result,
                action_items=[r.action_item(answers) for r in hits],
                failed_codes=[r.code for r in hits],
            )

    return Evaluation(result=InspectionResult.PASS)


def assess_inspection(
    door: FireDoor,
    answers: ChecklistAnswers,
    inspection_date: DateLike,
) -> InspectionOutcome:
    """
    Computed fields attached to an inspection right after it is submitted.
    """
    ev = evaluate(answers, door.features)
    action_required = ev.result in (InspectionResult.FAIL, InspectionResult.REQUIRES_ATTENTION)

    return InspectionOutcome(
        result=ev.result,
        action_items=ev.action_items,
        action_required=action_required,
        action_description="; ".join(ev.action_items) or None,
        priority=_PRIORITY_BY_RESULT.get(ev.result),
        status=InspectionStatus.REQUIRES_ACTION if action_required else InspectionStatus.COMPLETED,
        next_inspection_date=next_inspection_date(door.door_type, inspection_date),
    )
