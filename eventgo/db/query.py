"""
Table-scoped query helpers.

Thin wrappers over SQLAlchemy Core that return plain dicts, so route
handlers read like the rest of the codebase:

    with get_db_session() as db:
        event = fetch_one(db, events, id=event_id)
        regs = fetch_all(db, registrations, event_id=event_id, order_by="registered_at")

Keyword filters are equality tests; a list/tuple/set value becomes IN (...).
Extra positional arguments are passed straight to ``where()``.
"""

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.orm import Session

from eventgo.db.tables import new_id


def _conditions(table: Table, conditions: Iterable, filters: Dict[str, Any]) -> list:
    clauses = list(conditions)
    for name, value in filters.items():
        column = table.c[name]
        if isinstance(value, (list, tuple, set)):
            clauses.append(column.in_(list(value)))
        elif value is None:
            clauses.append(column.is_(None))
        else:
            clauses.append(column == value)
    return clauses


def row_to_dict(row) -> Optional[dict]:
    if row is None:
        return None
    return dict(row._mapping)


def fetch_one(db: Session, table: Table, *conditions, **filters) -> Optional[dict]:
    stmt = select(table).where(*_conditions(table, conditions, filters)).limit(1)
    return row_to_dict(db.execute(stmt).first())


def fetch_all(
    db: Session,
    table: Table,
    *conditions,
    order_by: Optional[str] = None,
    descending: bool = True,
    limit: Optional[int] = None,
    offset: int = 0,
    **filters,
) -> List[dict]:
    stmt = select(table).where(*_conditions(table, conditions, filters))
    if order_by:
        column = table.c[order_by]
        stmt = stmt.order_by(column.desc() if descending else column.asc())
    if limit is not None:
        stmt = stmt.limit(limit).offset(offset)
    return [row_to_dict(r) for r in db.execute(stmt).fetchall()]


def count_rows(db: Session, table: Table, *conditions, **filters) -> int:
    stmt = select(func.count()).select_from(table).where(*_conditions(table, conditions, filters))
    return db.execute(stmt).scalar_one()


def insert_row(db: Session, table: Table, values: Dict[str, Any]) -> dict:
    """Insert one row and read it back (defaults applied)."""
    values = dict(values)
    values.setdefault("id", new_id())
    db.execute(insert(table).values(**values))
    return fetch_one(db, table, id=values["id"])


def update_rows(db: Session, table: Table, values: Dict[str, Any], *conditions, **filters) -> int:
    """Update matching rows; returns the number of rows touched."""
    if not values:
        return 0
    stmt = update(table).where(*_conditions(table, conditions, filters)).values(**values)
    return db.execute(stmt).rowcount


def update_row(db: Session, table: Table, row_id: str, values: Dict[str, Any]) -> Optional[dict]:
    """Update a single row by id and return its new state (None if missing)."""
    if values:
        update_rows(db, table, values, id=row_id)
    return fetch_one(db, table, id=row_id)


def delete_rows(db: Session, table: Table, *conditions, **filters) -> int:
    stmt = delete(table).where(*_conditions(table, conditions, filters))
    return db.execute(stmt).rowcount
