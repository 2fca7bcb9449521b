"""Dialect-aware INSERT ... ON CONFLICT DO UPDATE."""
from typing import Any, Iterable, Sequence

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def _insert_for(db: Session, table):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table)
    if dialect == "sqlite":
        return sqlite.insert(table)
    raise NotImplementedError(f"Upsert is not supported for dialect '{dialect}'")


def upsert_rows(
    db: Session,
    model,
    rows: Sequence[dict[str, Any]],
    conflict_columns: Iterable[str],
    update_columns: Iterable[str],
) -> int:
    """Insert ``rows``, overwriting ``update_columns`` on a conflict.

    Rows must not repeat a conflict key within one call; PostgreSQL
    rejects a statement that touches the same row twice. Does not commit.

    Args:
        db: Database session
        model: Mapped class whose table receives the rows
        rows: Column-name to value mappings
        conflict_columns: Columns of the unique constraint to resolve on
        update_columns: Columns overwritten from the incoming row

    Returns:
        Number of rows inserted or updated
    """
    if not rows:
        return 0

    stmt = _insert_for(db, model.__table__).values(list(rows))
    stmt = stmt.on_conflict_do_update(
        index_elements=list(conflict_columns),
        set_={column: stmt.excluded[column] for column in update_columns},
    )
    db.execute(stmt)
    return len(rows)
