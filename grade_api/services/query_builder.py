"""
Statement builders shared by the grade and grade input services.

Column names are resolved through ``table.c`` so only columns declared on the
table can appear in a statement; every value travels as a bound parameter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Select, Table, Update, and_, func, literal, select, true, update


def is_present(value: Any) -> bool:
    return value is not None and value != ""


def build_filtered_select(table: Table, filters: Iterable[tuple[str, Any]]) -> Select:
    """
    Build ``SELECT * FROM table WHERE true [AND col = :p]...`` ordered newest first.

    ``filters`` is an ordered sequence of ``(column_name, value)`` pairs; pairs
    whose value is absent are skipped, so bound parameters stay in the same
    order as the supplied filters.
    """
    conditions = [
        table.c[column_name] == value for column_name, value in filters if is_present(value)
    ]
    return select(table).where(and_(true(), *conditions)).order_by(table.c.created_at.desc())


def build_partial_update(
    table: Table,
    key_column: str,
    key_value: Any,
    values: Mapping[str, Any],
    refreshed: Mapping[str, Any] | None = None,
) -> Update:
    """
    Build an UPDATE that sets every column in ``values`` to ``COALESCE(:new, column)``.

    A ``None`` value keeps the stored one, so an explicit null cannot clear a
    column through this statement. ``refreshed`` columns are assigned as-is.
    """
    assignments: dict[str, Any] = {}
    for column_name, value in values.items():
        column = table.c[column_name]
        assignments[column.name] = func.coalesce(literal(value, type_=column.type), column)
    for column_name, value in (refreshed or {}).items():
        assignments[table.c[column_name].name] = value

    return (
        update(table)
        .where(table.c[key_column] == key_value)
        .values(assignments)
        .returning(*table.c)
    )
