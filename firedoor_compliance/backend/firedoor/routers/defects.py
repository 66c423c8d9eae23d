# backend/firedoor/routers/defects.py
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from ..domain.compliance import next_ticket_number
from ..domain.defect_lifecycle import (
    InvalidDefectTransition,
    assign_contractor,
    close,
    complete_repair,
    transition,
)
from ..schemas import DefectActionIn, DefectOut, TicketNumberIn, TicketNumberOut

router = APIRouter(prefix="/defects", tags=["defects"])

log = logging.getLogger("firedoor.defects")


@router.post("/ticket-number", response_model=TicketNumberOut)
def ticket_number(payload: TicketNumberIn) -> TicketNumberOut:
    return TicketNumberOut(ticket_number=next_ticket_number(payload.last_ticket_number, payload.today))


@router.post("/transition", response_model=DefectOut)
def defect_action(payload: DefectActionIn) -> DefectOut:
    defect = payload.defect.to_domain()
    before = defect.status

    try:
        if payload.action == "assign":
            updated = assign_contractor(defect, payload.contractor_id)
        elif payload.action == "complete_repair":
            updated = complete_repair(defect, notes=payload.notes)
        elif payload.action == "close":
            updated = close(defect, notes=payload.notes)
        else:
            updated = transition(defect, payload.target_status)
    except InvalidDefectTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    log.info(
        "defect %s -> %s",
        before.value,
        updated.status.value,
        extra={"event": f"defect.{payload.action}", "defect_id": defect.id, "door_id": defect.door_id},
    )
    return DefectOut.model_validate(updated)
