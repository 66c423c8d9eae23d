# backend/tests/test_confidence_scoring.py
from __future__ import annotations

from datetime import date, timedelta

from firedoor.domain.confidence import score_confidence
from firedoor.models import Building, DoorType, FireDoor, InspectionRecord, InspectionResult

TODAY = date(2026, 10, 17)

PASS = InspectionResult.PASS
FAIL = InspectionResult.FAIL
RA = InspectionResult.REQUIRES_ATTENTION


def _door(
    door_type: DoorType = DoorType.FLAT_ENTRANCE,
    height: float = 8.0,
    location: str = "Level 2",
    cert: str | None = None,
) -> FireDoor:
    return FireDoor(
        id="door-1",
        building=Building(id="b-1", top_storey_height_m=height),
        door_type=door_type,
        location=location,
        certification_ref=cert,
    )


def _insp(days_ago: int, result: InspectionResult, **kw) -> InspectionRecord:
    return InspectionRecord(
        id=f"i-{days_ago}",
        inspection_date=TODAY - timedelta(days=days_ago),
        result=result,
        **kw,
    )


def _points(conf, key: str) -> int:
    return next(f.points for f in conf.factors if f.key == key)


def test_no_history_is_low_zero():
    conf = score_confidence(_door(), [], as_of=TODAY)
    assert conf.level == "low"
    assert conf.score == 0
    assert conf.reason == "No inspection records"
    assert conf.breakdown == ["No inspection history available"]


def test_perfect_record_scores_100():
    history = [
        _insp(10, PASS, inspector_notes="All good", photo_refs=("p1.jpg",)),
        _insp(100, PASS),
        _insp(200, PASS),
    ]
    conf = score_confidence(_door(cert="CERT-1"), history, as_of=TODAY)

    assert conf.score == 100
    assert conf.level == "high"
    assert conf.breakdown[0] == "✓ Recently inspected (< 60 days)"
    assert "✓ Complete evidence (photos + certification + notes)" in conf.breakdown
    assert conf.reason.startswith("High confidence")


def test_medium_example_scores_70():
    history = [
        _insp(100, PASS),
        _insp(200, RA, action_description="Signage missing"),
    ]
    conf = score_confidence(_door(), history, as_of=TODAY)

    # 20 recency + 15 reliability + 20 severity + 5 evidence + 10 environment
    assert [f.points for f in conf.factors] == [20, 15, 20, 5, 10]
    assert conf.score == 70
    assert conf.level == "medium"


def test_recency_never_increases_with_age():
    history = [_insp(10, PASS), _insp(90, PASS)]
    prev = None
    for shift in range(0, 401, 20):
        conf = score_confidence(_door(), history, as_of=TODAY + timedelta(days=shift))
        r = _points(conf, "recency")
        if prev is not None:
            assert r <= prev
        prev = r
    assert prev == 0


def test_score_is_bounded():
    history = [_insp(800, FAIL, action_description="Dangerous: door missing")]
    conf = score_confidence(_door(DoorType.COMMUNAL_STAIRWAY, height=40.0), history, as_of=TODAY)
    assert 0 <= conf.score <= 100
    assert conf.level == "low"


def test_environment_factor():
    h = [_insp(10, PASS)]
    assert _points(score_confidence(_door(height=8.0), h, as_of=TODAY), "environment") == 10
    assert _points(score_confidence(_door(height=15.0), h, as_of=TODAY), "environment") == 7
    assert _points(score_confidence(_door(height=25.0), h, as_of=TODAY), "environment") == 3
    stair = _door(DoorType.COMMUNAL_STAIRWAY, height=8.0)
    assert _points(score_confidence(stair, h, as_of=TODAY), "environment") == 7
    riser = _door(DoorType.OTHER, height=8.0, location="Electrical cupboard")
    assert _points(score_confidence(riser, h, as_of=TODAY), "environment") == 7


def test_unknown_height_is_low_rise():
    door = FireDoor(id="d", building=Building(id="b"), door_type=DoorType.FLAT_ENTRANCE)
    conf = score_confidence(door, [_insp(10, PASS)], as_of=TODAY)
    assert _points(conf, "environment") == 10


def test_reliability_tie_is_mixed():
    history = [_insp(10, PASS), _insp(50, FAIL)]
    conf = score_confidence(_door(), history, as_of=TODAY)
    assert _points(conf, "reliability") == 10
    assert "○ Mixed inspection history" in conf.breakdown


def test_reliability_uses_last_five_only():
    history = [_insp(10 * i, PASS) for i in range(1, 6)] + [_insp(400, FAIL), _insp(500, FAIL)]
    conf = score_confidence(_door(), history, as_of=TODAY)
    assert _points(conf, "reliability") == 25


def test_unresolved_critical_fail_scores_zero_severity():
    history = [_insp(10, FAIL, action_description="URGENT: closer missing")]
    conf = score_confidence(_door(), history, as_of=TODAY)
    assert _points(conf, "severity") == 0


def test_resolved_critical_fail():
    history = [
        _insp(10, PASS),
        _insp(50, FAIL, action_description="urgent repair to closer"),
    ]
    conf = score_confidence(_door(), history, as_of=TODAY)
    assert _points(conf, "severity") == 10


def test_plain_fail_then_pass_counts_as_minor_history():
    history = [_insp(10, PASS), _insp(50, FAIL, action_description="Hinges not CE marked")]
    conf = score_confidence(_door(), history, as_of=TODAY)
    assert _points(conf, "severity") == 15


def test_input_order_does_not_matter():
    a = _insp(10, PASS)
    b = _insp(300, FAIL, action_description="Dangerous gap")
    c = _insp(150, RA)
    door = _door()
    assert score_confidence(door, [b, a, c], as_of=TODAY) == score_confidence(door, [a, c, b], as_of=TODAY)
