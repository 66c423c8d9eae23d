# backend/tests/test_door_status.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from firedoor.domain.door_status import (
    current_status,
    latest_inspection,
    risk_level,
    status_label,
)
from firedoor.models import InspectionRecord, InspectionResult, InspectionStatus

TODAY = date(2026, 10, 17)


def _insp(d: date, result, next_due=None, iid=None) -> InspectionRecord:
    return InspectionRecord(
        id=iid or d.isoformat(),
        inspection_date=d,
        result=result,
        next_inspection_date=next_due,
    )


def test_latest_inspection_ignores_input_order():
    old = _insp(date(2026, 1, 5), InspectionResult.FAIL)
    new = _insp(date(2026, 9, 1), InspectionResult.PASS)
    assert latest_inspection([old, new]) is new
    assert latest_inspection([new, old]) is new
    assert current_status([old, new]) == InspectionResult.PASS


def test_no_history():
    assert latest_inspection([]) is None
    assert current_status([]) is None
    rl = risk_level([], as_of=TODAY)
    assert (rl.level, rl.label) == ("unknown", "Not Assessed")


def test_status_labels():
    assert status_label("PASS") == "Compliant"
    assert status_label(InspectionResult.FAIL) == "Non-Compliant"
    assert status_label("REQUIRES_ATTENTION") == "Requires Attention"
    assert status_label(InspectionStatus.REQUIRES_ACTION) == "Requires Attention"
    assert status_label(None) == "Pending"
    assert status_label("whatever") == "Pending"


def test_fail_is_critical_even_if_not_due():
    rl = risk_level([_insp(date(2026, 10, 1), InspectionResult.FAIL, date(2027, 1, 1))], as_of=TODAY)
    assert (rl.level, rl.label) == ("critical", "Critical")


def test_overdue_beats_minor_and_pass():
    rl = risk_level([_insp(date(2025, 6, 1), InspectionResult.PASS, date(2026, 6, 1))], as_of=TODAY)
    assert (rl.level, rl.label) == ("critical", "Overdue")


def test_minor_and_compliant():
    minor = risk_level(
        [_insp(date(2026, 10, 1), InspectionResult.REQUIRES_ATTENTION, date(2027, 1, 1))], as_of=TODAY
    )
    assert (minor.level, minor.label) == ("minor", "Minor Issues")

    ok = risk_level([_insp(date(2026, 10, 1), InspectionResult.PASS, date(2027, 10, 1))], as_of=TODAY)
    assert (ok.level, ok.label) == ("ok", "Compliant")


def test_pending_inspection_without_result():
    rl = risk_level([_insp(date(2026, 10, 10), None)], as_of=TODAY)
    assert rl.label == "Pending"


def test_latest_inspection_compares_aware_times_as_instants():
    utc_noon = InspectionRecord(
        id="a",
        inspection_date=datetime(2026, 10, 10, 12, 0, tzinfo=timezone.utc),
        result=InspectionResult.FAIL,
    )
    # 10:00 at UTC-5 is 15:00 UTC, later than noon UTC despite the smaller wall-clock time.
    eastern = InspectionRecord(
        id="b",
        inspection_date=datetime(2026, 10, 10, 10, 0, tzinfo=timezone(timedelta(hours=-5))),
        result=InspectionResult.PASS,
    )
    assert latest_inspection([utc_noon, eastern]).id == "b"
    assert latest_inspection([eastern, utc_noon]).id == "b"
    assert current_status([utc_noon, eastern]) == InspectionResult.PASS


def test_same_day_reinspection_wins_by_time():
    fail = InspectionRecord(id="fail", inspection_date=datetime(2026, 10, 10, 9, 0), result=InspectionResult.FAIL)
    passed = InspectionRecord(id="pass", inspection_date=datetime(2026, 10, 10, 15, 0), result=InspectionResult.PASS)
    for history in ([fail, passed], [passed, fail]):
        assert latest_inspection(history).id == "pass"
        assert risk_level(history, as_of=TODAY).label == "Compliant"
