# backend/firedoor/domain/compliance/checklist.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...models import Answer, ChecklistAnswers, DoorFeature


@dataclass(frozen=True)
class ChecklistRule:
    """
    One checklist predicate.

    The rule matches when the answer stored at `field` equals `fails_on`.
    UNANSWERED never matches. When `requires` is set, the rule only applies
    to doors that have that feature.
    """

    code: str
    field: str
    message: str
    fails_on: Answer = Answer.NO
    comment_field: Optional[str] = None
    requires: Optional[DoorFeature] = None

    def applies_to(self, features: frozenset[DoorFeature]) -> bool:
        return self.requires is None or self.requires in features

    def matches(self, answers: ChecklistAnswers) -> bool:
        return getattr(answers, self.field) == self.fails_on

    def action_item(self, answers: ChecklistAnswers) -> str:
        comment = getattr(answers, self.comment_field) if self.comment_field else None
        comment = (comment or "").strip()
        if comment:
            return f"{self.message}: {comment}"
        return self.message


CRITICAL_RULES: tuple[ChecklistRule, ...] = (
    ChecklistRule("CERTIFICATION", "certification_provided", "Certification not provided"),
    ChecklistRule(
        "VISUAL_INSPECTION",
        "visual_inspection_ok",
        "Visual inspection failed",
        comment_field="visual_inspection_comments",
    ),
    ChecklistRule(
        "LEAF_FRAME_RATING",
        "door_leaf_frame_same_rating",
        "Door leaf/frame rating issue",
        comment_field="door_leaf_frame_rating_comments",
    ),
    ChecklistRule(
        "EXCESSIVE_GAPS_OR_DAMAGE",
        "excessive_gaps_or_damage",
        "Excessive gaps or damage",
        fails_on=Answer.YES,
        comment_field="excessive_gaps_or_damage_comments",
    ),
    ChecklistRule(
        "CLOSES_COMPLETELY",
        "door_closes_completely",
        "Door does not close completely",
        comment_field="door_closes_completely_comments",
    ),
    ChecklistRule(
        "SELF_CLOSING",
        "door_closes_from_any_angle",
        "Self-closing device issue",
        comment_field="door_closes_from_any_angle_comments",
    ),
    ChecklistRule(
        "DIRECTION_OF_TRAVEL",
        "door_opens_in_direction_of_travel",
        "Door does not open in direction of travel",
        comment_field="door_opens_in_direction_of_travel_comments",
    ),
    # frame_gaps_acceptable is stored inverted: YES means gaps exceed 4mm.
    ChecklistRule(
        "FRAME_GAPS",
        "frame_gaps_acceptable",
        "Frame gaps exceed 4mm",
        fails_on=Answer.YES,
        comment_field="frame_gaps_acceptable_comments",
    ),
    ChecklistRule("HINGES_SECURE", "hinges_secure", "Hinges are not secure"),
    ChecklistRule("HINGES_CE_MARKED", "hinges_ce_marked", "Hinges not CE marked"),
    ChecklistRule("HINGES_CONDITION", "hinges_good_condition", "Hinges have rust or oil leaks"),
    ChecklistRule("SCREWS_SECURE", "screws_in_place_and_secure", "Screws not in place or not secure"),
    ChecklistRule("MINIMUM_HINGES", "minimum_hinges_present", "Insufficient number of hinges"),
    ChecklistRule(
        "INTUMESCENT_STRIPS",
        "intumescent_strips_intact",
        "Intumescent strips damaged",
        requires=DoorFeature.INTUMESCENT_STRIPS,
    ),
)

MINOR_RULES: tuple[ChecklistRule, ...] = (
    ChecklistRule(
        "SMOKE_SEALS",
        "smoke_seals_intact",
        "Smoke seals damaged or missing",
        requires=DoorFeature.SMOKE_SEAL,
    ),
    ChecklistRule(
        "LETTERBOX",
        "letterbox_closes_properly",
        "Letterbox does not close properly",
        requires=DoorFeature.LETTERBOX,
    ),
    ChecklistRule(
        "SIGNAGE",
        "door_signage_correct",
        "Door signage missing or incorrect",
        comment_field="door_signage_comments",
    ),
)


def failed_rules(
    rules: tuple[ChecklistRule, ...],
    answers: ChecklistAnswers,
    features: frozenset[DoorFeature],
) -> list[ChecklistRule]:
    return [r for r in rules if r.applies_to(features) and r.matches(answers)]
