# backend/firedoor/routers/inspections.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter

from ..domain.compliance import assess_inspection, build_defects, plan_defects
from ..schemas import DefectDraftOut, EvaluateIn, EvaluateOut

router = APIRouter(prefix="/inspections", tags=["inspections"])

log = logging.getLogger("firedoor.inspections")


@router.post("/evaluate", response_model=EvaluateOut)
def evaluate_inspection(payload: EvaluateIn) -> EvaluateOut:
    """
    Computed fields for a submitted inspection plus the defects it raises.

    Ticket numbers are only issued when the inspection already has an id.
    """
    door = payload.door.to_domain()
    answers = payload.checklist.to_domain()
    inspection_date = payload.inspection_date or date.today()

    outcome = assess_inspection(door, answers, inspection_date)
    drafts = plan_defects(door, answers, outcome.result)

    defects: list[DefectDraftOut]
    if payload.inspection_id:
        rows = build_defects(
            drafts,
            door_id=door.id,
            inspection_id=payload.inspection_id,
            last_ticket=payload.last_ticket_number,
            today=inspection_date,
        )
        defects = [
            DefectDraftOut(
                category=d.category,
                description=d.description,
                severity=d.severity,
                priority=d.priority,
                ticket_number=d.ticket_number,
            )
            for d in rows
        ]
    else:
        defects = [DefectDraftOut(**d.as_dict()) for d in drafts]

    log.info(
        "inspection evaluated",
        extra={
            "event": "inspection.evaluated",
            "door_id": door.id,
            "building_id": door.building.id,
            "inspection_id": payload.inspection_id,
            "result": outcome.result.value,
        },
    )

    return EvaluateOut(
        door_id=door.id,
        inspection_id=payload.inspection_id,
        result=outcome.result,
        action_items=outcome.action_items,
        action_required=outcome.action_required,
        action_description=outcome.action_description,
        priority=outcome.priority,
        status=outcome.status,
        inspection_date=inspection_date,
        next_inspection_date=outcome.next_inspection_date,
        defects=defects,
    )
