import enum
from collections.abc import Collection, Iterable

from pydantic import BaseModel

from grade_api.core.errors import ValidationError
from grade_api.schemas.grade import GradeCreate
from grade_api.schemas.grade_input import GradeInputCreate, GradeInputUpdate


class InputType(str, enum.Enum):
    QUIZ = "quiz"
    EXAM = "exam"
    ASSIGNMENT = "assignment"
    PROJECT = "project"
    RECITATION = "recitation"
    ATTENDANCE = "attendance"


class Term(str, enum.Enum):
    MIDTERMS = "midterms"
    FINALS = "finals"


INPUT_TYPES = tuple(member.value for member in InputType)
TERMS = tuple(member.value for member in Term)

GRADE_REQUIRED_FIELDS = ("student_id", "enrollment_id", "course_subject_id")
GRADE_INPUT_REQUIRED_FIELDS = ("subject_grade_id", "input_type", "input_name", "score", "term")


def require_fields(
    payload: BaseModel,
    fields: Iterable[str],
    presence_only: Collection[str] = (),
) -> None:
    """
    Raise ValidationError listing every missing field.

    Fields in ``presence_only`` count as supplied whenever the key was sent,
    even with a zero or null value; the rest must be truthy, so 0 and "" are missing.
    """
    missing = []
    for field in fields:
        if field in presence_only:
            if field not in payload.model_fields_set:
                missing.append(field)
            continue
        value = getattr(payload, field)
        if not value:
            missing.append(field)

    if missing:
        raise ValidationError(
            "Missing required fields: " + ", ".join(missing),
            error="Required: " + ", ".join(fields),
        )


def validate_choice(field: str, value: str | None, allowed: tuple[str, ...]) -> None:
    if value is None:
        return
    if value not in allowed:
        raise ValidationError(f"Invalid {field}. Must be one of: {', '.join(allowed)}")


def validate_grade_create(payload: GradeCreate) -> None:
    require_fields(payload, GRADE_REQUIRED_FIELDS)


def validate_grade_input_create(payload: GradeInputCreate) -> None:
    require_fields(payload, GRADE_INPUT_REQUIRED_FIELDS, presence_only=("score",))
    validate_choice("input_type", payload.input_type, INPUT_TYPES)
    validate_choice("term", payload.term, TERMS)


def validate_grade_input_update(payload: GradeInputUpdate) -> None:
    validate_choice("input_type", payload.input_type, INPUT_TYPES)
    validate_choice("term", payload.term, TERMS)
