# backend/tests/test_scheduling.py
from __future__ import annotations

from datetime import date, datetime

import pytest

from firedoor.domain.scheduling import (
    DoorDue,
    add_months,
    days_until_due,
    frequency_description,
    inspection_cycle_label,
    inspection_type_for,
    is_overdue,
    next_inspection_date,
    plan_auto_schedule,
    reminder_urgency,
)
from firedoor.models import Building, BuildingType, DoorType, FireDoor


def test_flat_entrance_is_twelve_months():
    assert next_inspection_date(DoorType.FLAT_ENTRANCE, date(2026, 5, 14)) == date(2027, 5, 14)


@pytest.mark.parametrize(
    "door_type",
    [DoorType.COMMUNAL_STAIRWAY, DoorType.COMMUNAL_CORRIDOR, DoorType.PLANT_ROOM, DoorType.OTHER],
)
def test_other_doors_are_three_months(door_type):
    assert next_inspection_date(door_type, date(2026, 5, 14)) == date(2026, 8, 14)


def test_accepts_string_door_type():
    assert next_inspection_date("flat_entrance", date(2026, 1, 1)) == date(2027, 1, 1)


def test_month_end_clamps():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert next_inspection_date(DoorType.COMMUNAL_LOBBY, date(2025, 11, 30)) == date(2026, 2, 28)
    assert next_inspection_date(DoorType.FLAT_ENTRANCE, date(2024, 2, 29)) == date(2025, 2, 28)


def test_year_rollover():
    assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)
    assert add_months(date(2026, 12, 31), 12) == date(2027, 12, 31)


def test_datetime_keeps_time_of_day():
    got = next_inspection_date(DoorType.COMMUNAL_STAIRWAY, datetime(2026, 1, 31, 9, 30))
    assert got == datetime(2026, 4, 30, 9, 30)


def test_cycle_labels():
    assert inspection_type_for(DoorType.FLAT_ENTRANCE) == "TWELVE_MONTH"
    assert inspection_type_for(DoorType.COMMUNAL_LOBBY) == "THREE_MONTH"
    assert inspection_cycle_label(DoorType.FLAT_ENTRANCE) == "12-month cycle"
    assert inspection_cycle_label(DoorType.METER_CUPBOARD) == "3-month cycle"


@pytest.mark.parametrize(
    "door_type,height,building_type,expected",
    [
        (DoorType.FLAT_ENTRANCE, 12.0, BuildingType.RESIDENTIAL, "Annually — legal requirement"),
        (DoorType.COMMUNAL_STAIRWAY, 30.0, None, "Quarterly — legal requirement"),
        (DoorType.COMMUNAL_LOBBY, 11.5, BuildingType.HOTEL, "Quarterly — legal requirement"),
        (DoorType.OFFICE, 20.0, BuildingType.HEALTHCARE, "3–6 months based on risk"),
        (DoorType.FLAT_ENTRANCE, 5.0, BuildingType.CARE_FACILITY, "3–6 months based on risk"),
        (DoorType.KITCHEN, 25.0, BuildingType.HOTEL, "6-monthly minimum"),
        (DoorType.FLAT_ENTRANCE, 9.0, BuildingType.TRANSPORT, "6-monthly minimum"),
        (DoorType.PLANT_ROOM, 30.0, BuildingType.HMO, "6-monthly recommended"),
        (DoorType.FLAT_ENTRANCE, 11.0, None, "6-monthly recommended"),
        (DoorType.PLANT_ROOM, 40.0, BuildingType.MIXED_USE, "6-monthly recommended"),
    ],
)
def test_frequency_description_table(door_type, height, building_type, expected):
    assert frequency_description(door_type, height, building_type) == expected


def test_frequency_description_unknown_height_is_low_rise():
    assert frequency_description(DoorType.FLAT_ENTRANCE, None, None) == "6-monthly recommended"


def test_frequency_description_does_not_change_due_date():
    # 30m tower: advisory says quarterly for communal doors, the due date is
    # still door-type driven.
    d = date(2026, 1, 10)
    assert frequency_description(DoorType.FLAT_ENTRANCE, 30.0, None) == "Annually — legal requirement"
    assert next_inspection_date(DoorType.FLAT_ENTRANCE, d) == date(2027, 1, 10)


def test_due_helpers():
    today = date(2026, 10, 17)
    assert days_until_due(date(2026, 10, 20), today) == 3
    assert days_until_due(datetime(2026, 10, 16, 23, 0), today) == -1
    assert is_overdue(date(2026, 10, 16), today) is True
    assert is_overdue(date(2026, 10, 17), today) is False
    assert is_overdue(None, today) is False


def test_reminder_urgency():
    assert reminder_urgency([]) is None
    assert reminder_urgency([10, -2]) == "critical"
    assert reminder_urgency([30, 7]) == "urgent"
    assert reminder_urgency([8, 20]) == "upcoming"
    assert reminder_urgency([5], urgent_days=3) == "upcoming"


def _door(door_id: str, door_type: DoorType) -> FireDoor:
    return FireDoor(id=door_id, building=Building(id="b-1", top_storey_height_m=15.0), door_type=door_type)


def test_auto_schedule_plans_doors_due_in_window():
    today = date(2026, 10, 17)
    doors = [
        # due 2026-11-01 (3 months) -> in window
        DoorDue(_door("stair", DoorType.COMMUNAL_STAIRWAY), date(2026, 8, 1)),
        # due 2026-09-01 -> overdue, scheduled today
        DoorDue(_door("lobby", DoorType.COMMUNAL_LOBBY), date(2026, 6, 1)),
        # due 2027-03-01 -> outside window
        DoorDue(_door("flat", DoorType.FLAT_ENTRANCE), date(2026, 3, 1)),
        # never inspected -> skipped
        DoorDue(_door("new", DoorType.COMMUNAL_CORRIDOR), None),
        # already pending -> skipped
        DoorDue(_door("pending", DoorType.COMMUNAL_CORRIDOR), date(2026, 6, 1), has_pending_inspection=True),
    ]

    plan = plan_auto_schedule(doors, today=today, window_days=30)

    assert [p.door_id for p in plan] == ["lobby", "stair"]

    lobby, stair = plan
    assert lobby.due_date == date(2026, 9, 1)
    assert lobby.scheduled_date == today
    assert lobby.overdue is True
    assert lobby.inspection_type == "THREE_MONTH"

    assert stair.due_date == date(2026, 11, 1)
    assert stair.scheduled_date == date(2026, 11, 1)
    assert stair.overdue is False


def test_auto_schedule_window_is_inclusive():
    today = date(2026, 10, 17)
    d = DoorDue(_door("edge", DoorType.COMMUNAL_STAIRWAY), date(2026, 8, 16))  # due 2026-11-16
    assert len(plan_auto_schedule([d], today=today, window_days=30)) == 1
    assert plan_auto_schedule([d], today=today, window_days=29) == []
