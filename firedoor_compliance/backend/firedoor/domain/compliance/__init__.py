# backend/firedoor/domain/compliance/__init__.py
from .checklist import CRITICAL_RULES, MINOR_RULES, ChecklistRule
from .defect_mapping import DefectDraft, build_defects, next_ticket_number, plan_defects
from .evaluator import Evaluation, InspectionOutcome, assess_inspection, evaluate

__all__ = [
    "ChecklistRule",
    "CRITICAL_RULES",
    "MINOR_RULES",
    "DefectDraft",
    "plan_defects",
    "build_defects",
    "next_ticket_number",
    "Evaluation",
    "InspectionOutcome",
    "evaluate",
    "assess_inspection",
]
