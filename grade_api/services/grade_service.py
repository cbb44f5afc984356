from datetime import datetime

from sqlalchemy import case, delete, func, insert, select
from sqlalchemy.orm import Session

from grade_api.core.errors import NotFoundError
from grade_api.models.grade import GradeRecord
from grade_api.schemas.grade import (
    GradeCreate,
    GradeRecordResponse,
    GradeUpdate,
    StudentStatistics,
)
from grade_api.services.query_builder import build_filtered_select, build_partial_update
from grade_api.services.store import fetch_rows
from grade_api.services.validation import validate_grade_create

UPDATABLE_COLUMNS = (
    "student_id",
    "enrollment_id",
    "course_subject_id",
    "midterm_grade",
    "finals_grade",
    "subject_grade",
    "remarks",
    "finalized_by",
)


class GradeService:
    """CRUD and statistics over finalized subject grades."""

    table = GradeRecord.__table__

    def list_grades(
        self,
        db: Session,
        student_id: int | None = None,
        course_subject_id: int | None = None,
        enrollment_id: int | None = None,
    ) -> list[GradeRecordResponse]:
        statement = build_filtered_select(
            self.table,
            [
                ("student_id", student_id),
                ("course_subject_id", course_subject_id),
                ("enrollment_id", enrollment_id),
            ],
        )
        rows = fetch_rows(db, statement, "Error fetching grades")
        return [GradeRecordResponse.model_validate(row) for row in rows]

    def get_grade(self, db: Session, grade_id: int) -> GradeRecordResponse:
        statement = select(self.table).where(self.table.c.subject_grade_id == grade_id)
        rows = fetch_rows(db, statement, "Error fetching grade")
        return self._single(rows)

    def create_grade(self, db: Session, payload: GradeCreate) -> GradeRecordResponse:
        validate_grade_create(payload)

        now = datetime.utcnow()
        statement = (
            insert(self.table)
            .values(
                **payload.model_dump(include=set(UPDATABLE_COLUMNS)),
                finalized_at=now,
                created_at=now,
                updated_at=now,
            )
            .returning(*self.table.c)
        )
        rows = fetch_rows(db, statement, "Error creating grade", commit=True)
        return GradeRecordResponse.model_validate(rows[0])

    def update_grade(self, db: Session, grade_id: int, payload: GradeUpdate) -> GradeRecordResponse:
        now = datetime.utcnow()
        statement = build_partial_update(
            self.table,
            "subject_grade_id",
            grade_id,
            {column: getattr(payload, column) for column in UPDATABLE_COLUMNS},
            refreshed={"finalized_at": now, "updated_at": now},
        )
        rows = fetch_rows(db, statement, "Error updating grade", commit=True)
        return self._single(rows)

    def delete_grade(self, db: Session, grade_id: int) -> int:
        statement = (
            delete(self.table)
            .where(self.table.c.subject_grade_id == grade_id)
            .returning(self.table.c.subject_grade_id)
        )
        rows = fetch_rows(db, statement, "Error deleting grade", commit=True)
        if not rows:
            raise NotFoundError("Grade not found")
        return rows[0]["subject_grade_id"]

    def student_statistics(self, db: Session, student_id: int) -> StudentStatistics:
        """
        Aggregate a student's subject grades.

        A student without grades still yields one row: zero counts and null
        average/highest/lowest. Only remarks exactly equal to "Passed" or
        "Failed" are counted.
        """
        grade = self.table.c.subject_grade
        remarks = self.table.c.remarks
        statement = select(
            func.count().label("total_subjects"),
            func.round(func.avg(grade), 2).label("average_grade"),
            func.max(grade).label("highest_grade"),
            func.min(grade).label("lowest_grade"),
            func.count(case((remarks == "Passed", 1))).label("passed_count"),
            func.count(case((remarks == "Failed", 1))).label("failed_count"),
        ).where(self.table.c.student_id == student_id)
        rows = fetch_rows(db, statement, "Error fetching statistics")
        return StudentStatistics.model_validate(rows[0])

    def _single(self, rows: list[dict]) -> GradeRecordResponse:
        if not rows:
            raise NotFoundError("Grade not found")
        return GradeRecordResponse.model_validate(rows[0])


grade_service = GradeService()
