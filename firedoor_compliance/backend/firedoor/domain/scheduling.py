# backend/firedoor/domain/scheduling.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from ..models import COMMUNAL_DOOR_TYPES, BuildingType, DateLike, DoorType, FireDoor

# Legal threshold for blocks of flats (Fire Safety (England) Regulations 2022).
HIGH_RISE_HEIGHT_M = 11.0

FLAT_ENTRANCE_CYCLE_MONTHS = 12
DEFAULT_CYCLE_MONTHS = 3

RISK_BASED_BUILDING_TYPES = frozenset(
    {
        BuildingType.EDUCATION,
        BuildingType.HEALTHCARE,
        BuildingType.CHILDCARE,
        BuildingType.CARE_FACILITY,
    }
)
HIGH_USE_BUILDING_TYPES = frozenset(
    {
        BuildingType.COMMERCIAL,
        BuildingType.INDUSTRIAL,
        BuildingType.HOTEL,
        BuildingType.HOSTEL,
        BuildingType.GUEST_HOUSE,
        BuildingType.ENTERTAINMENT,
        BuildingType.TRANSPORT,
    }
)
LOW_RISE_BUILDING_TYPES = frozenset({BuildingType.HMO, BuildingType.RESIDENTIAL})


def add_months(d: DateLike, months: int) -> DateLike:
    """
    Calendar month arithmetic. Days past the end of the target month clamp
    to its last day (Jan 31 + 1 month -> Feb 28/29). Time of day is kept.
    """
    total = d.month - 1 + int(months)
    y = d.year + total // 12
    m = total % 12 + 1
    last_day = calendar.monthrange(y, m)[1]
    return d.replace(year=y, month=m, day=min(d.day, last_day))


def _door_type(raw: Union[DoorType, str]) -> DoorType:
    return raw if isinstance(raw, DoorType) else DoorType(str(raw).strip().upper())


def _building_type(raw: Union[BuildingType, str, None]) -> Optional[BuildingType]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, BuildingType):
        return raw
    try:
        return BuildingType(str(raw).strip().upper())
    except ValueError:
        return None


def inspection_cycle_months(door_type: Union[DoorType, str]) -> int:
    if _door_type(door_type) == DoorType.FLAT_ENTRANCE:
        return FLAT_ENTRANCE_CYCLE_MONTHS
    return DEFAULT_CYCLE_MONTHS


def next_inspection_date(door_type: Union[DoorType, str], last_inspection_date: DateLike) -> DateLike:
    """
    Due date of the next inspection.

    Only the door type matters: flat entrance doors run on a 12 month cycle,
    every other door on 3 months. Building height/type feed the advisory
    frequency_description() only.
    """
    return add_months(last_inspection_date, inspection_cycle_months(door_type))


def inspection_type_for(door_type: Union[DoorType, str]) -> str:
    return "TWELVE_MONTH" if inspection_cycle_months(door_type) == 12 else "THREE_MONTH"


def inspection_cycle_label(door_type: Union[DoorType, str]) -> str:
    return f"{inspection_cycle_months(door_type)}-month cycle"


def frequency_description(
    door_type: Union[DoorType, str],
    building_height_m: Optional[float],
    building_type: Union[BuildingType, str, None],
) -> str:
    """
    Advisory inspection frequency shown next to a door. First match wins.
    """
    dt = _door_type(door_type)
    bt = _building_type(building_type)
    height = float(building_height_m or 0.0)
    communal = dt in COMMUNAL_DOOR_TYPES

    if dt == DoorType.FLAT_ENTRANCE and height > HIGH_RISE_HEIGHT_M:
        return "Annually — legal requirement"
    if communal and height > HIGH_RISE_HEIGHT_M:
        return "Quarterly — legal requirement"
    if bt in RISK_BASED_BUILDING_TYPES:
        return "3–6 months based on risk"
    if bt in HIGH_USE_BUILDING_TYPES:
        return "6-monthly minimum"
    if bt in LOW_RISE_BUILDING_TYPES or height <= HIGH_RISE_HEIGHT_M:
        return "6-monthly recommended"
    if dt == DoorType.FLAT_ENTRANCE:
        return "Annually — recommended"
    if communal:
        return "6-monthly recommended"
    return "6-monthly recommended"


# -----------------------------
# Due-date helpers
# -----------------------------
def _as_date(d: DateLike) -> date:
    return d.date() if isinstance(d, datetime) else d


def days_until_due(due: DateLike, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (_as_date(due) - _as_date(today)).days


def is_overdue(due: Optional[DateLike], today: Optional[date] = None) -> bool:
    if due is None:
        return False
    return days_until_due(due, today) < 0


def reminder_urgency(days_until: Iterable[int], urgent_days: int = 7) -> Optional[str]:
    """
    critical: something already overdue
    urgent:   soonest due within urgent_days
    upcoming: everything else
    """
    vals = list(days_until)
    if not vals:
        return None
    soonest = min(vals)
    if soonest < 0:
        return "critical"
    if soonest <= urgent_days:
        return "urgent"
    return "upcoming"


@dataclass(frozen=True)
class DoorDue:
    door: FireDoor
    last_inspection_date: Optional[DateLike] = None
    has_pending_inspection: bool = False


@dataclass(frozen=True)
class ScheduledInspection:
    door_id: str
    due_date: date
    scheduled_date: date
    inspection_type: str
    overdue: bool

    def as_dict(self) -> dict:
        return {
            "door_id": self.door_id,
            "due_date": self.due_date.isoformat(),
            "scheduled_date": self.scheduled_date.isoformat(),
            "inspection_type": self.inspection_type,
            "overdue": self.overdue,
        }


def plan_auto_schedule(
    doors: Iterable[DoorDue],
    today: Optional[date] = None,
    window_days: int = 30,
) -> list[ScheduledInspection]:
    """
    Pending inspections to create for doors due within `window_days`.

    Never-inspected doors and doors that already have a pending inspection
    are skipped. Overdue doors are scheduled for today.
    """
    today = today or date.today()
    horizon = today + timedelta(days=int(window_days))

    out: list[ScheduledInspection] = []
    for d in doors:
        if d.last_inspection_date is None or d.has_pending_inspection:
            continue

        due = _as_date(next_inspection_date(d.door.door_type, d.last_inspection_date))
        if due > horizon:
            continue

        out.append(
            ScheduledInspection(
                door_id=d.door.id,
                due_date=due,
                scheduled_date=due if due > today else today,
                inspection_type=inspection_type_for(d.door.door_type),
                overdue=due < today,
            )
        )

    return sorted(out, key=lambda s: (s.due_date, s.door_id))
