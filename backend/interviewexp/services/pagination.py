"""Offset pagination over SQLAlchemy queries."""

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> tuple[list, int]:
    """Return one page of rows plus the total row count.

    ``query`` must already carry its ORDER BY; the count runs without it.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total
