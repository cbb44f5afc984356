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
from grade_api.schemas.grade import (
    GradeCreate,
    GradeRecordResponse,
    GradeUpdate,
    StudentStatistics,
)
from grade_api.services.grade_service import grade_service

router = APIRouter(
    prefix="/grades",
    tags=["grades"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=ListResponse[GradeRecordResponse])
def list_grades(
    student_id: OptionalIntFilter = None,
    course_subject_id: OptionalIntFilter = None,
    enrollment_id: OptionalIntFilter = None,
    db: Session = Depends(get_db),
):
    grades = grade_service.list_grades(
        db,
        student_id=student_id,
        course_subject_id=course_subject_id,
        enrollment_id=enrollment_id,
    )
    return ListResponse[GradeRecordResponse](count=len(grades), data=grades)


@router.get("/stats/{student_id}", response_model=ItemResponse[StudentStatistics])
def get_student_statistics(student_id: int, db: Session = Depends(get_db)):
    return ItemResponse[StudentStatistics](data=grade_service.student_statistics(db, student_id))


@router.get("/{grade_id}", response_model=ItemResponse[GradeRecordResponse])
def get_grade(grade_id: int, db: Session = Depends(get_db)):
    return ItemResponse[GradeRecordResponse](data=grade_service.get_grade(db, grade_id))


@router.post(
    "",
    response_model=WriteResponse[GradeRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_grade(payload: GradeCreate, db: Session = Depends(get_db)):
    grade = grade_service.create_grade(db, payload)
    return WriteResponse[GradeRecordResponse](message="Grade created successfully", data=grade)


@router.put("/{grade_id}", response_model=WriteResponse[GradeRecordResponse])
def update_grade(grade_id: int, payload: GradeUpdate, db: Session = Depends(get_db)):
    grade = grade_service.update_grade(db, grade_id, payload)
    return WriteResponse[GradeRecordResponse](message="Grade updated successfully", data=grade)


@router.delete("/{grade_id}", response_model=DeleteResponse)
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    deleted_id = grade_service.delete_grade(db, grade_id)
    return DeleteResponse(message="Grade deleted successfully", deleted_id=deleted_id)
