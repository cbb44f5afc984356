from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from grade_api.core.db import get_db
from grade_api.schemas.common import (
    DeleteResponse,
    ErrorResponse,
    ItemResponse,
    ListResponse,
    OptionalIntFilter,
    WriteResponse,
)
from grade_api.schemas.grade_input import (
    GradeInputCreate,
    GradeInputRecordResponse,
    GradeInputUpdate,
    TermSummary,
)
from grade_api.services.grade_input_service import grade_input_service

router = APIRouter(
    prefix="/grade_inputs",
    tags=["grade_inputs"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=ListResponse[GradeInputRecordResponse])
def list_grade_inputs(
    subject_grade_id: OptionalIntFilter = None,
    term: str | None = None,
    input_type: str | None = None,
    db: Session = Depends(get_db),
):
    inputs = grade_input_service.list_inputs(
        db,
        subject_grade_id=subject_grade_id,
        term=term,
        input_type=input_type,
    )
    return ListResponse[GradeInputRecordResponse](count=len(inputs), data=inputs)


@router.get("/summary/{subject_grade_id}", response_model=ListResponse[TermSummary])
def get_subject_summary(subject_grade_id: int, db: Session = Depends(get_db)):
    summary = grade_input_service.subject_summary(db, subject_grade_id)
    return ListResponse[TermSummary](count=len(summary), data=summary)


@router.get("/{grade_input_id}", response_model=ItemResponse[GradeInputRecordResponse])
def get_grade_input(grade_input_id: int, db: Session = Depends(get_db)):
    grade_input = grade_input_service.get_input(db, grade_input_id)
    return ItemResponse[GradeInputRecordResponse](data=grade_input)


@router.post(
    "",
    response_model=WriteResponse[GradeInputRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_grade_input(payload: GradeInputCreate, db: Session = Depends(get_db)):
    grade_input = grade_input_service.create_input(db, payload)
    return WriteResponse[GradeInputRecordResponse](
        message="Grade input created successfully", data=grade_input
    )


@router.put("/{grade_input_id}", response_model=WriteResponse[GradeInputRecordResponse])
def update_grade_input(
    grade_input_id: int, payload: GradeInputUpdate, db: Session = Depends(get_db)
):
    grade_input = grade_input_service.update_input(db, grade_input_id, payload)
    return WriteResponse[GradeInputRecordResponse](
        message="Grade input updated successfully", data=grade_input
    )


@router.delete("/{grade_input_id}", response_model=DeleteResponse)
def delete_grade_input(grade_input_id: int, db: Session = Depends(get_db)):
    deleted_id = grade_input_service.delete_input(db, grade_input_id)
    return DeleteResponse(message="Grade input deleted successfully", deleted_id=deleted_id)
