# backend/firedoor/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .domain.compliance.defect_mapping import PRIORITY_BY_SEVERITY
from .models import (
    Answer,
    Building,
    BuildingType,
    ChecklistAnswers,
    Defect,
    DefectPriority,
    DefectSeverity,
    DefectStatus,
    DoorFeature,
    DoorType,
    FireDoor,
    FireRating,
    InspectionRecord,
    InspectionResult,
    InspectionStatus,
)


# -------------------- Buildings / Doors --------------------

class BuildingIn(BaseModel):
    id: str
    name: str = ""
    building_type: Optional[BuildingType] = None
    number_of_storeys: Optional[int] = Field(default=None, ge=0)
    top_storey_height_m: Optional[float] = Field(default=None, ge=0)

    def to_domain(self) -> Building:
        return Building(
            id=self.id,
            name=self.name,
            building_type=self.building_type,
            number_of_storeys=self.number_of_storeys,
            top_storey_height_m=self.top_storey_height_m,
        )


class DoorIn(BaseModel):
    id: str
    building: BuildingIn
    door_type: DoorType
    door_number: str = ""
    location: str = ""
    fire_rating: Optional[FireRating] = None

    has_intumescent_strips: bool = False
    has_smoke_seal: bool = False
    has_letterbox: bool = False
    has_air_transfer_grille: bool = False
    has_glazing: bool = False

    certification_ref: Optional[str] = None

    def features(self) -> frozenset[DoorFeature]:
        flags = {
            DoorFeature.INTUMESCENT_STRIPS: self.has_intumescent_strips,
            DoorFeature.SMOKE_SEAL: self.has_smoke_seal,
            DoorFeature.LETTERBOX: self.has_letterbox,
            DoorFeature.AIR_TRANSFER_GRILLE: self.has_air_transfer_grille,
            DoorFeature.GLAZING: self.has_glazing,
        }
        return frozenset(f for f, on in flags.items() if on)

    def to_domain(self) -> FireDoor:
        return FireDoor(
            id=self.id,
            building=self.building.to_domain(),
            door_type=self.door_type,
            door_number=self.door_number,
            location=self.location,
            fire_rating=self.fire_rating,
            features=self.features(),
            certification_ref=self.certification_ref,
        )


# -------------------- Checklist --------------------

class ChecklistIn(BaseModel):
    """
    Checklist answers as captured by the inspection form.
    null = not answered. frame_gaps_acceptable is stored inverted
    (true = gaps exceed 4mm).
    """

    certification_provided: Optional[bool] = None
    visual_inspection_ok: Optional[bool] = None
    visual_inspection_comments: Optional[str] = None
    door_leaf_frame_same_rating: Optional[bool] = None
    door_leaf_frame_rating_comments: Optional[str] = None
    excessive_gaps_or_damage: Optional[bool] = None
    excessive_gaps_or_damage_comments: Optional[str] = None
    door_closes_completely: Optional[bool] = None
    door_closes_completely_comments: Optional[str] = None
    door_closes_from_any_angle: Optional[bool] = None
    door_closes_from_any_angle_comments: Optional[str] = None
    door_opens_in_direction_of_travel: Optional[bool] = None
    door_opens_in_direction_of_travel_comments: Optional[str] = None
    frame_gaps_acceptable: Optional[bool] = None
    frame_gaps_acceptable_comments: Optional[str] = None
    max_gap_size_mm: Optional[float] = Field(default=None, ge=0)
    hinges_secure: Optional[bool] = None
    hinges_ce_marked: Optional[bool] = None
    hinges_good_condition: Optional[bool] = None
    screws_in_place_and_secure: Optional[bool] = None
    hinge_count: Optional[int] = Field(default=None, ge=0)
    minimum_hinges_present: Optional[bool] = None
    intumescent_strips_intact: Optional[bool] = None
    smoke_seals_intact: Optional[bool] = None
    letterbox_closes_properly: Optional[bool] = None
    glazing_intact: Optional[bool] = None
    air_transfer_grille_intact: Optional[bool] = None
    door_signage_correct: Optional[bool] = None
    door_signage_comments: Optional[str] = None
    door_construction: Optional[str] = None
    damage_or_defects: Optional[bool] = None
    damage_description: Optional[str] = None
    access_denied: bool = False
    access_denied_reason: Optional[str] = None

    def to_domain(self) -> ChecklistAnswers:
        values = {}
        for name, fld in ChecklistAnswers.__dataclass_fields__.items():
            raw = getattr(self, name)
            values[name] = Answer.of(raw) if isinstance(fld.default, Answer) else raw
        return ChecklistAnswers(**values)


# -------------------- Inspection history --------------------

# Plain dates stay dates; timestamps keep time of day and offset.
InspectionWhen = Annotated[Union[date, datetime], Field(union_mode="left_to_right")]


class InspectionHistoryIn(BaseModel):
    id: str
    inspection_date: InspectionWhen
    overall_result: Optional[InspectionResult] = None
    status: InspectionStatus = InspectionStatus.COMPLETED
    action_description: Optional[str] = None
    inspector_notes: Optional[str] = None
    photo_refs: list[str] = Field(default_factory=list)
    next_inspection_date: Optional[InspectionWhen] = None

    def to_domain(self) -> InspectionRecord:
        return InspectionRecord(
            id=self.id,
            inspection_date=self.inspection_date,
            result=self.overall_result,
            status=self.status,
            action_description=self.action_description,
            inspector_notes=self.inspector_notes,
            photo_refs=tuple(self.photo_refs),
            next_inspection_date=self.next_inspection_date,
        )


# -------------------- Evaluation --------------------

class EvaluateIn(BaseModel):
    door: DoorIn
    checklist: ChecklistIn
    inspection_id: Optional[str] = None
    inspection_date: Optional[date] = None
    # Last defect ticket issued today, so new tickets continue the sequence.
    last_ticket_number: Optional[str] = None


class DefectDraftOut(BaseModel):
    category: str
    description: str
    severity: DefectSeverity
    priority: DefectPriority
    ticket_number: Optional[str] = None


class EvaluateOut(BaseModel):
    door_id: str
    inspection_id: Optional[str] = None
    result: InspectionResult
    action_items: list[str]
    action_required: bool
    action_description: Optional[str] = None
    priority: Optional[str] = None
    status: InspectionStatus
    inspection_date: date
    next_inspection_date: date
    defects: list[DefectDraftOut] = Field(default_factory=list)


# -------------------- Door status / confidence --------------------

class DoorHistoryIn(BaseModel):
    door: DoorIn
    inspections: list[InspectionHistoryIn] = Field(default_factory=list)
    as_of: Optional[date] = None


class ConfidenceOut(BaseModel):
    door_id: str
    level: Literal["high", "medium", "low"]
    score: int = Field(ge=0, le=100)
    reason: str
    breakdown: list[str]


class DoorStatusOut(BaseModel):
    door_id: str
    current_status: Optional[InspectionResult] = None
    status_label: str
    risk_level: str
    risk_label: str
    inspection_cycle: str
    frequency: str
    last_inspection_date: Optional[InspectionWhen] = None
    next_inspection_date: Optional[InspectionWhen] = None
    days_until_due: Optional[int] = None
    overdue: bool = False


# -------------------- Scheduling --------------------

class NextDateOut(BaseModel):
    door_type: DoorType
    last_inspection_date: date
    next_inspection_date: date
    inspection_type: str


class FrequencyOut(BaseModel):
    door_type: DoorType
    building_height_m: Optional[float] = None
    building_type: Optional[BuildingType] = None
    description: str


class AutoScheduleDoorIn(BaseModel):
    door: DoorIn
    last_inspection_date: Optional[date] = None
    has_pending_inspection: bool = False


class AutoScheduleIn(BaseModel):
    doors: list[AutoScheduleDoorIn] = Field(default_factory=list)
    today: Optional[date] = None
    window_days: Optional[int] = Field(default=None, ge=0)


class ScheduledInspectionOut(BaseModel):
    door_id: str
    due_date: date
    scheduled_date: date
    inspection_type: str
    overdue: bool


class AutoScheduleOut(BaseModel):
    today: date
    window_days: int
    scheduled: list[ScheduledInspectionOut]
    urgency: Optional[str] = None


# -------------------- Defects --------------------

class DefectIn(BaseModel):
    id: str
    door_id: str
    inspection_id: str
    category: str
    description: str
    severity: DefectSeverity
    priority: Optional[DefectPriority] = None
    status: DefectStatus = DefectStatus.OPEN
    ticket_number: Optional[str] = None
    assigned_contractor_id: Optional[str] = None
    assigned_at: Optional[datetime] = None
    repair_completed_at: Optional[datetime] = None
    repair_notes: Optional[str] = None
    reinspection_required: bool = True
    closed_at: Optional[datetime] = None
    closure_notes: Optional[str] = None

    def to_domain(self) -> Defect:
        return Defect(
            id=self.id,
            door_id=self.door_id,
            inspection_id=self.inspection_id,
            category=self.category,
            description=self.description,
            severity=self.severity,
            priority=self.priority or PRIORITY_BY_SEVERITY[self.severity],
            status=self.status,
            ticket_number=self.ticket_number,
            assigned_contractor_id=self.assigned_contractor_id,
            assigned_at=self.assigned_at,
            repair_completed_at=self.repair_completed_at,
            repair_notes=self.repair_notes,
            reinspection_required=self.reinspection_required,
            closed_at=self.closed_at,
            closure_notes=self.closure_notes,
        )


class DefectOut(DefectIn):
    priority: DefectPriority
    model_config = ConfigDict(from_attributes=True)


class DefectActionIn(BaseModel):
    defect: DefectIn
    action: Literal["transition", "assign", "complete_repair", "close"] = "transition"
    target_status: Optional[DefectStatus] = None
    contractor_id: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_action_args(self) -> "DefectActionIn":
        if self.action == "transition" and self.target_status is None:
            raise ValueError("target_status is required for action=transition")
        if self.action == "assign" and not (self.contractor_id or "").strip():
            raise ValueError("contractor_id is required for action=assign")
        return self


class TicketNumberIn(BaseModel):
    last_ticket_number: Optional[str] = None
    today: Optional[date] = None


class TicketNumberOut(BaseModel):
    ticket_number: str
