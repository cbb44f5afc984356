from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GradeInputCreate(BaseModel):
    subject_grade_id: int | None = None
    input_type: str | None = None
    input_name: str | None = None
    score: float | None = None
    term: str | None = None
    created_by: int | None = None


class GradeInputUpdate(BaseModel):
    input_type: str | None = None
    input_name: str | None = None
    score: float | None = None
    term: str | None = None


class GradeInputRecordResponse(BaseModel):
    grade_input_id: int
    subject_grade_id: int
    input_type: str
    input_name: str
    score: float
    term: str
    created_by: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TermSummary(BaseModel):
    term: str
    input_count: int
    average_score: float | None = None
    highest_score: float | None = None
    lowest_score: float | None = None
