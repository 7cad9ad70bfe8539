from pydantic import BaseModel, computed_field
from typing import Literal, Optional, List

class ConflictDetails(BaseModel):
    conflict_type: Literal["teacher", "class"]
    schedule_id: str
    # class already taught by the teacher, or teacher already teaching the class
    conflicting_id: str
    conflicting_period_id: str

class ConflictResult(BaseModel):
    has_conflict: bool
    conflict_details: Optional[ConflictDetails] = None

class AssignmentCheck(BaseModel):
    day: str
    academic_session_id: Optional[str] = None
    teacher_conflict: ConflictResult
    class_conflict: ConflictResult
    period_is_interval: bool = False

    @computed_field
    @property
    def has_conflict(self) -> bool:
        return self.teacher_conflict.has_conflict or self.class_conflict.has_conflict

class ConflictDetail(BaseModel):
    id: str
    conflict_type: Literal["teacher_conflict", "class_conflict"]
    description: str
    day: str
    period_id: str
    academic_session_id: Optional[str] = None
    affected_slots: List[str]  # schedule ids sharing the slot

class ConflictReport(BaseModel):
    conflicts: List[ConflictDetail]
    scanned_schedules: int
