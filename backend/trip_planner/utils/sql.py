"""
SQL utilities for consistent handling of query results.

SQLModel/SQLAlchemy may return COUNT results as int or as a 1-tuple/Row.
Use scalar_int() to coerce, and count_rows() to count any select.
"""
from typing import Any

from sqlalchemy import func
from sqlmodel import Session, select


def scalar_int(x: Any) -> int:
    """Convert COUNT/aggregate result to int. Handles int, None or 1-tuple/Row."""
    if x is None:
        return 0
    try:
        return int(x[0])
    except (TypeError, IndexError):
        return int(x)


def count_rows(session: Session, statement: Any) -> int:
    """COUNT(*) over an arbitrary select, ignoring its ORDER BY/LIMIT."""
    subquery = statement.order_by(None).limit(None).offset(None).subquery()
    return scalar_int(session.exec(select(func.count()).select_from(subquery)).one())


LIKE_ESCAPE = "\\"


def contains_pattern(keyword: str) -> str:
    """LIKE pattern matching ``keyword`` as a literal substring. Use with escape=LIKE_ESCAPE."""
    escaped = keyword.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
