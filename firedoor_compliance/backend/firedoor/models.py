# backend/firedoor/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

DateLike = Union[date, datetime]


# -----------------------------
# Vocabularies
# -----------------------------
class DoorType(str, Enum):
    FLAT_ENTRANCE = "FLAT_ENTRANCE"
    COMMUNAL_STAIRWAY = "COMMUNAL_STAIRWAY"
    COMMUNAL_CORRIDOR = "COMMUNAL_CORRIDOR"
    COMMUNAL_LOBBY = "COMMUNAL_LOBBY"
    PLANT_ROOM = "PLANT_ROOM"
    SERVICE_RISER = "SERVICE_RISER"
    RISER_CUPBOARD = "RISER_CUPBOARD"
    METER_CUPBOARD = "METER_CUPBOARD"
    KITCHEN = "KITCHEN"
    HALLWAY = "HALLWAY"
    DINING_AREA = "DINING_AREA"
    OFFICE = "OFFICE"
    OTHER = "OTHER"


COMMUNAL_DOOR_TYPES = frozenset(
    {DoorType.COMMUNAL_STAIRWAY, DoorType.COMMUNAL_CORRIDOR, DoorType.COMMUNAL_LOBBY}
)


class FireRating(str, Enum):
    FD20 = "FD20"
    FD30 = "FD30"
    FD60 = "FD60"
    FD90 = "FD90"
    FD120 = "FD120"


class BuildingType(str, Enum):
    RESIDENTIAL = "RESIDENTIAL"
    HMO = "HMO"
    COMMERCIAL = "COMMERCIAL"
    MIXED_USE = "MIXED_USE"
    INDUSTRIAL = "INDUSTRIAL"
    PUBLIC = "PUBLIC"
    HOTEL = "HOTEL"
    HOSTEL = "HOSTEL"
    GUEST_HOUSE = "GUEST_HOUSE"
    EDUCATION = "EDUCATION"
    CHILDCARE = "CHILDCARE"
    HEALTHCARE = "HEALTHCARE"
    CARE_FACILITY = "CARE_FACILITY"
    TRANSPORT = "TRANSPORT"
    SPECIALITY_ACCOMMODATION = "SPECIALITY_ACCOMMODATION"
    ENTERTAINMENT = "ENTERTAINMENT"
    COMMUNITY = "COMMUNITY"


class DoorFeature(str, Enum):
    INTUMESCENT_STRIPS = "INTUMESCENT_STRIPS"
    SMOKE_SEAL = "SMOKE_SEAL"
    LETTERBOX = "LETTERBOX"
    AIR_TRANSFER_GRILLE = "AIR_TRANSFER_GRILLE"
    GLAZING = "GLAZING"


class Answer(str, Enum):
    """Checklist answer. UNANSWERED is never treated as a failure."""

    YES = "YES"
    NO = "NO"
    UNANSWERED = "UNANSWERED"

    @classmethod
    def of(cls, raw: Optional[bool]) -> "Answer":
        if raw is None:
            return cls.UNANSWERED
        return cls.YES if raw else cls.NO


class InspectionResult(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    REQUIRES_ATTENTION = "REQUIRES_ATTENTION"


class InspectionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REQUIRES_ACTION = "REQUIRES_ACTION"


class DefectSeverity(str, Enum):
    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"


class DefectPriority(str, Enum):
    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DefectStatus(str, Enum):
    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    AWAITING_PARTS = "AWAITING_PARTS"
    REPAIR_COMPLETED = "REPAIR_COMPLETED"
    REINSPECTION_PASSED = "REINSPECTION_PASSED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


# -----------------------------
# Buildings / doors
# -----------------------------
@dataclass(frozen=True)
class Building:
    id: str
    name: str = ""
    building_type: Optional[BuildingType] = None
    number_of_storeys: Optional[int] = None
    # Drives the 11m / 18m thresholds. Unknown height is treated as 0.
    top_storey_height_m: Optional[float] = None

    @property
    def height_m(self) -> float:
        return float(self.top_storey_height_m or 0.0)


@dataclass(frozen=True)
class FireDoor:
    id: str
    building: Building
    door_type: DoorType
    door_number: str = ""
    location: str = ""
    fire_rating: Optional[FireRating] = None
    features: frozenset[DoorFeature] = frozenset()
    certification_ref: Optional[str] = None

    def has(self, feature: DoorFeature) -> bool:
        return feature in self.features


# -----------------------------
# Inspections
# -----------------------------
@dataclass(frozen=True)
class ChecklistAnswers:
    certification_provided: Answer = Answer.UNANSWERED
    visual_inspection_ok: Answer = Answer.UNANSWERED
    visual_inspection_comments: Optional[str] = None
    door_leaf_frame_same_rating: Answer = Answer.UNANSWERED
    door_leaf_frame_rating_comments: Optional[str] = None
    excessive_gaps_or_damage: Answer = Answer.UNANSWERED
    excessive_gaps_or_damage_comments: Optional[str] = None
    door_closes_completely: Answer = Answer.UNANSWERED
    door_closes_completely_comments: Optional[str] = None
    door_closes_from_any_angle: Answer = Answer.UNANSWERED
    door_closes_from_any_angle_comments: Optional[str] = None
    door_opens_in_direction_of_travel: Answer = Answer.UNANSWERED
    door_opens_in_direction_of_travel_comments: Optional[str] = None
    # Inverted storage convention: YES means the gaps EXCEED 4mm.
    frame_gaps_acceptable: Answer = Answer.UNANSWERED
    frame_gaps_acceptable_comments: Optional[str] = None
    max_gap_size_mm: Optional[float] = None
    hinges_secure: Answer = Answer.UNANSWERED
    hinges_ce_marked: Answer = Answer.UNANSWERED
    hinges_good_condition: Answer = Answer.UNANSWERED
    screws_in_place_and_secure: Answer = Answer.UNANSWERED
    hinge_count: Optional[int] = None
    minimum_hinges_present: Answer = Answer.UNANSWERED
    intumescent_strips_intact: Answer = Answer.UNANSWERED
    smoke_seals_intact: Answer = Answer.UNANSWERED
    letterbox_closes_properly: Answer = Answer.UNANSWERED
    glazing_intact: Answer = Answer.UNANSWERED
    air_transfer_grille_intact: Answer = Answer.UNANSWERED
    door_signage_correct: Answer = Answer.UNANSWERED
    door_signage_comments: Optional[str] = None
    door_construction: Optional[str] = None
    damage_or_defects: Answer = Answer.UNANSWERED
    damage_description: Optional[str] = None
    access_denied: bool = False
    access_denied_reason: Optional[str] = None


@dataclass(frozen=True)
class InspectionRecord:
    id: str
    inspection_date: DateLike
    result: Optional[InspectionResult] = None
    status: InspectionStatus = InspectionStatus.COMPLETED
    action_description: Optional[str] = None
    inspector_notes: Optional[str] = None
    photo_refs: tuple[str, ...] = ()
    next_inspection_date: Optional[DateLike] = None


# -----------------------------
# Defects
# -----------------------------
@dataclass(frozen=True)
class Defect:
    id: str
    door_id: str
    inspection_id: str
    category: str
    description: str
    severity: DefectSeverity
    priority: DefectPriority
    status: DefectStatus = DefectStatus.OPEN
    ticket_number: Optional[str] = None
    assigned_contractor_id: Optional[str] = None
    assigned_at: Optional[datetime] = None
    repair_completed_at: Optional[datetime] = None
    repair_notes: Optional[str] = None
    reinspection_required: bool = True
    closed_at: Optional[datetime] = None
    closure_notes: Optional[str] = None
    history: tuple[DefectStatus, ...] = field(default=())
