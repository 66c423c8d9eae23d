# backend/firedoor/domain/defect_lifecycle.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..models import Defect, DefectStatus

# -----------------------------------------------------------------------------
# Defect lifecycle
# -----------------------------------------------------------------------------
#   OPEN -> ASSIGNED -> IN_PROGRESS -> (AWAITING_PARTS) -> REPAIR_COMPLETED
#        -> REINSPECTION_PASSED -> CLOSED
#
# CANCELLED is reachable from every non-terminal state.
# A failed reinspection sends REPAIR_COMPLETED back to IN_PROGRESS.
# REPAIR_COMPLETED -> CLOSED is only allowed when no reinspection is required.
# -----------------------------------------------------------------------------

TERMINAL = frozenset({DefectStatus.CLOSED, DefectStatus.CANCELLED})

ALLOWED: dict[DefectStatus, frozenset[DefectStatus]] = {
    DefectStatus.OPEN: frozenset({DefectStatus.ASSIGNED, DefectStatus.IN_PROGRESS}),
    DefectStatus.ASSIGNED: frozenset({DefectStatus.OPEN, DefectStatus.IN_PROGRESS}),
    DefectStatus.IN_PROGRESS: frozenset({DefectStatus.AWAITING_PARTS, DefectStatus.REPAIR_COMPLETED}),
    DefectStatus.AWAITING_PARTS: frozenset({DefectStatus.IN_PROGRESS, DefectStatus.REPAIR_COMPLETED}),
    DefectStatus.REPAIR_COMPLETED: frozenset(
        {DefectStatus.REINSPECTION_PASSED, DefectStatus.IN_PROGRESS, DefectStatus.CLOSED}
    ),
    DefectStatus.REINSPECTION_PASSED: frozenset({DefectStatus.CLOSED}),
    DefectStatus.CLOSED: frozenset(),
    DefectStatus.CANCELLED: frozenset(),
}


class InvalidDefectTransition(ValueError):
    def __init__(self, current: DefectStatus, target: DefectStatus, why: str = "") -> None:
        self.current = current
        self.target = target
        msg = f"Cannot move defect from {current.value} to {target.value}"
        super().__init__(f"{msg}: {why}" if why else msg)


def can_transition(defect: Defect, target: DefectStatus) -> bool:
    cur = defect.status
    if cur in TERMINAL:
        return False
    if target == DefectStatus.CANCELLED:
        return True
    if target not in ALLOWED.get(cur, frozenset()):
        return False
    if cur == DefectStatus.REPAIR_COMPLETED and target == DefectStatus.CLOSED:
        return not defect.reinspection_required
    return True


def transition(defect: Defect, target: DefectStatus, *, at: Optional[datetime] = None) -> Defect:
    if not can_transition(defect, target):
        why = "defect is closed" if defect.status in TERMINAL else ""
        if defect.status == DefectStatus.REPAIR_COMPLETED and target == DefectStatus.CLOSED:
            why = "reinspection required"
        raise InvalidDefectTransition(defect.status, target, why)

    now = at or datetime.utcnow()
    changes: dict = {"status": target, "history": defect.history + (defect.status,)}

    if target == DefectStatus.REPAIR_COMPLETED and defect.repair_completed_at is None:
        changes["repair_completed_at"] = now
    if target == DefectStatus.CLOSED:
        changes["closed_at"] = now
    if target == DefectStatus.OPEN:
        changes["assigned_contractor_id"] = None
        changes["assigned_at"] = None

    return replace(defect, **changes)


def assign_contractor(defect: Defect, contractor_id: str, *, at: Optional[datetime] = None) -> Defect:
    """
    First assignment moves an OPEN defect to ASSIGNED. Reassignment keeps the
    current status and the original assignment date.
    """
    if defect.status in TERMINAL:
        raise InvalidDefectTransition(defect.status, DefectStatus.ASSIGNED, "defect is closed")

    now = at or datetime.utcnow()
    if defect.status == DefectStatus.OPEN:
        d = transition(defect, DefectStatus.ASSIGNED, at=now)
        return replace(d, assigned_contractor_id=contractor_id, assigned_at=now)

    return replace(
        defect,
        assigned_contractor_id=contractor_id,
        assigned_at=defect.assigned_at or now,
    )


def complete_repair(defect: Defect, *, notes: Optional[str] = None, at: Optional[datetime] = None) -> Defect:
    d = transition(defect, DefectStatus.REPAIR_COMPLETED, at=at)
    return replace(d, repair_notes=notes) if notes else d


def close(defect: Defect, *, notes: Optional[str] = None, at: Optional[datetime] = None) -> Defect:
    d = transition(defect, DefectStatus.CLOSED, at=at)
    return replace(d, closure_notes=notes) if notes else d
