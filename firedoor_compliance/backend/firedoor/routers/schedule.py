# backend/firedoor/routers/schedule.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from ..config import settings
from ..domain.scheduling import (
    DoorDue,
    days_until_due,
    frequency_description,
    inspection_type_for,
    next_inspection_date,
    plan_auto_schedule,
    reminder_urgency,
)
from ..models import BuildingType, DoorType
from ..schemas import (
    AutoScheduleIn,
    AutoScheduleOut,
    FrequencyOut,
    NextDateOut,
    ScheduledInspectionOut,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])

log = logging.getLogger("firedoor.schedule")


@router.get("/next-date", response_model=NextDateOut)
def next_date(
    door_type: DoorType = Query(...),
    last_inspection_date: date = Query(...),
) -> NextDateOut:
    return NextDateOut(
        door_type=door_type,
        last_inspection_date=last_inspection_date,
        next_inspection_date=next_inspection_date(door_type, last_inspection_date),
        inspection_type=inspection_type_for(door_type),
    )


@router.get("/frequency", response_model=FrequencyOut)
def frequency(
    door_type: DoorType = Query(...),
    building_height_m: Optional[float] = Query(default=None, ge=0),
    building_type: Optional[BuildingType] = Query(default=None),
) -> FrequencyOut:
    return FrequencyOut(
        door_type=door_type,
        building_height_m=building_height_m,
        building_type=building_type,
        description=frequency_description(door_type, building_height_m, building_type),
    )


@router.post("/auto", response_model=AutoScheduleOut)
def auto_schedule(payload: AutoScheduleIn) -> AutoScheduleOut:
    today = payload.today or date.today()
    window = payload.window_days if payload.window_days is not None else settings.auto_schedule_window_days

    due = [
        DoorDue(
            door=d.door.to_domain(),
            last_inspection_date=d.last_inspection_date,
            has_pending_inspection=d.has_pending_inspection,
        )
        for d in payload.doors
    ]
    planned = plan_auto_schedule(due, today=today, window_days=window)
    urgency = reminder_urgency(
        (days_until_due(s.due_date, today) for s in planned),
        urgent_days=settings.reminder_urgent_days,
    )

    log.info(
        "auto schedule planned %d of %d doors",
        len(planned),
        len(due),
        extra={"event": "schedule.auto"},
    )
    return AutoScheduleOut(
        today=today,
        window_days=window,
        scheduled=[ScheduledInspectionOut(**s.as_dict()) for s in planned],
        urgency=urgency,
    )
