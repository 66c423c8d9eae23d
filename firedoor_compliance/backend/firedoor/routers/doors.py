# backend/firedoor/routers/doors.py
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter

from ..domain.confidence import score_confidence
from ..domain.door_status import latest_inspection, risk_level, status_label
from ..domain.scheduling import (
    days_until_due,
    frequency_description,
    inspection_cycle_label,
    is_overdue,
    next_inspection_date,
)
from ..schemas import ConfidenceOut, DoorHistoryIn, DoorStatusOut

router = APIRouter(prefix="/doors", tags=["doors"])

log = logging.getLogger("firedoor.doors")


@router.post("/confidence", response_model=ConfidenceOut)
def door_confidence(payload: DoorHistoryIn) -> ConfidenceOut:
    door = payload.door.to_domain()
    history = [i.to_domain() for i in payload.inspections]

    c = score_confidence(door, history, as_of=payload.as_of)

    log.info(
        "confidence scored",
        extra={"event": "door.confidence", "door_id": door.id, "score": c.score},
    )
    return ConfidenceOut(
        door_id=door.id,
        level=c.level,
        score=c.score,
        reason=c.reason,
        breakdown=c.breakdown,
    )


@router.post("/status", response_model=DoorStatusOut)
def door_status(payload: DoorHistoryIn) -> DoorStatusOut:
    """
    Display status derived from the most recent inspection by date.

    A stored next_inspection_date on that inspection wins; otherwise it is
    computed from the door type.
    """
    door = payload.door.to_domain()
    history = [i.to_domain() for i in payload.inspections]
    today = payload.as_of or date.today()

    latest = latest_inspection(history)
    risk = risk_level(history, as_of=today)

    last_date = None
    next_date = None
    if latest is not None:
        last_date = latest.inspection_date
        next_date = latest.next_inspection_date or next_inspection_date(door.door_type, last_date)

    result = latest.result if latest else None
    return DoorStatusOut(
        door_id=door.id,
        current_status=result,
        status_label=status_label(result) if latest else "Not Inspected",
        risk_level=risk.level,
        risk_label=risk.label,
        inspection_cycle=inspection_cycle_label(door.door_type),
        frequency=frequency_description(
            door.door_type, door.building.top_storey_height_m, door.building.building_type
        ),
        last_inspection_date=last_date,
        next_inspection_date=next_date,
        days_until_due=days_until_due(next_date, today) if next_date else None,
        overdue=is_overdue(next_date, today),
    )
