from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

from grade_api.core.errors import StoreFailure

logger = logging.getLogger(__name__)


def fetch_rows(
    db: Session,
    statement: Executable,
    failure_message: str,
    commit: bool = False,
) -> list[dict[str, Any]]:
    """Run one statement and return its rows as dicts, committing writes."""
    try:
        rows = [dict(row) for row in db.execute(statement).mappings()]
        if commit:
            db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure_message)
        raise StoreFailure(failure_message, error=str(exc)) from exc
    return rows
