from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GradeBase(BaseModel):
    student_id: int | None = None
    enrollment_id: int | None = None
    course_subject_id: int | None = None
    midterm_grade: float | None = None
    finals_grade: float | None = None
    subject_grade: float | None = None
    remarks: str | None = None
    finalized_by: int | None = None


class GradeCreate(GradeBase):
    """Required fields are checked by the service so failures use the 400 envelope."""


class GradeUpdate(GradeBase):
    """Omitted and null fields both keep the stored value."""


class GradeRecordResponse(GradeBase):
    subject_grade_id: int
    student_id: int
    enrollment_id: int
    course_subject_id: int
    finalized_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentStatistics(BaseModel):
    total_subjects: int
    average_grade: float | None = None
    highest_grade: float | None = None
    lowest_grade: float | None = None
    passed_count: int
    failed_count: int
