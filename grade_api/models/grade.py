from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from grade_api.core.db import Base


class GradeRecord(Base):
    __tablename__ = "tbl_grades_subject_grade"
    __table_args__ = (
        Index("idx_subject_grade_student", "student_id"),
        Index("idx_subject_grade_course_subject", "course_subject_id"),
    )

    subject_grade_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False)
    enrollment_id: Mapped[int] = mapped_column(Integer, nullable=False)
    course_subject_id: Mapped[int] = mapped_column(Integer, nullable=False)
    midterm_grade: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    finals_grade: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    subject_grade: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    finalized_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    finalized_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class GradeInputRecord(Base):
    __tablename__ = "tbl_grade_grade_input"
    __table_args__ = (Index("idx_grade_input_subject_grade", "subject_grade_id"),)

    grade_input_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Logical reference to tbl_grades_subject_grade; not enforced here.
    subject_grade_id: Mapped[int] = mapped_column(Integer, nullable=False)
    input_type: Mapped[str] = mapped_column(String(20), nullable=False)
    input_name: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    term: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
