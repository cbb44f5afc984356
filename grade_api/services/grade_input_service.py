from datetime import datetime

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from grade_api.core.errors import NotFoundError
from grade_api.models.grade import GradeInputRecord
from grade_api.schemas.grade_input import (
    GradeInputCreate,
    GradeInputRecordResponse,
    GradeInputUpdate,
    TermSummary,
)
from grade_api.services.query_builder import build_filtered_select, build_partial_update
from grade_api.services.store import fetch_rows
from grade_api.services.validation import (
    validate_grade_input_create,
    validate_grade_input_update,
)

CREATE_COLUMNS = ("subject_grade_id", "input_type", "input_name", "score", "term", "created_by")
UPDATABLE_COLUMNS = ("input_type", "input_name", "score", "term")


class GradeInputService:
    """CRUD and per-term summaries over the graded items behind a subject grade."""

    table = GradeInputRecord.__table__

    def list_inputs(
        self,
        db: Session,
        subject_grade_id: int | None = None,
        term: str | None = None,
        input_type: str | None = None,
    ) -> list[GradeInputRecordResponse]:
        statement = build_filtered_select(
            self.table,
            [
                ("subject_grade_id", subject_grade_id),
                ("term", term),
                ("input_type", input_type),
            ],
        )
        rows = fetch_rows(db, statement, "Error fetching grade inputs")
        return [GradeInputRecordResponse.model_validate(row) for row in rows]

    def get_input(self, db: Session, grade_input_id: int) -> GradeInputRecordResponse:
        statement = select(self.table).where(self.table.c.grade_input_id == grade_input_id)
        rows = fetch_rows(db, statement, "Error fetching grade input")
        return self._single(rows)

    def create_input(self, db: Session, payload: GradeInputCreate) -> GradeInputRecordResponse:
        validate_grade_input_create(payload)

        now = datetime.utcnow()
        statement = (
            insert(self.table)
            .values(
                **payload.model_dump(include=set(CREATE_COLUMNS)),
                created_at=now,
                updated_at=now,
            )
            .returning(*self.table.c)
        )
        rows = fetch_rows(db, statement, "Error creating grade input", commit=True)
        return GradeInputRecordResponse.model_validate(rows[0])

    def update_input(
        self, db: Session, grade_input_id: int, payload: GradeInputUpdate
    ) -> GradeInputRecordResponse:
        validate_grade_input_update(payload)

        statement = build_partial_update(
            self.table,
            "grade_input_id",
            grade_input_id,
            {column: getattr(payload, column) for column in UPDATABLE_COLUMNS},
            refreshed={"updated_at": datetime.utcnow()},
        )
        rows = fetch_rows(db, statement, "Error updating grade input", commit=True)
        return self._single(rows)

    def delete_input(self, db: Session, grade_input_id: int) -> int:
        statement = (
            delete(self.table)
            .where(self.table.c.grade_input_id == grade_input_id)
            .returning(self.table.c.grade_input_id)
        )
        rows = fetch_rows(db, statement, "Error deleting grade input", commit=True)
        if not rows:
            raise NotFoundError("Grade input not found")
        return rows[0]["grade_input_id"]

    def subject_summary(self, db: Session, subject_grade_id: int) -> list[TermSummary]:
        score = self.table.c.score
        statement = (
            select(
                self.table.c.term,
                func.count().label("input_count"),
                func.round(func.avg(score), 2).label("average_score"),
                func.max(score).label("highest_score"),
                func.min(score).label("lowest_score"),
            )
            .where(self.table.c.subject_grade_id == subject_grade_id)
            .group_by(self.table.c.term)
            .order_by(self.table.c.term.asc())
        )
        rows = fetch_rows(db, statement, "Error fetching grade input summary")
        return [TermSummary.model_validate(row) for row in rows]

    def _single(self, rows: list[dict]) -> GradeInputRecordResponse:
        if not rows:
            raise NotFoundError("Grade input not found")
        return GradeInputRecordResponse.model_validate(rows[0])


grade_input_service = GradeInputService()
