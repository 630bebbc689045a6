"""Generic key-value storage over the ``kv_store`` table.

Values are JSON documents. Prefix scans come back in key order.
"""

from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.kv_entry import KVEntry


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get(db: Session, key: str) -> Any | None:
    entry = db.get(KVEntry, key)
    return entry.value if entry is not None else None


def set(db: Session, key: str, value: Any) -> None:
    db.merge(KVEntry(key=key, value=value))
    db.commit()


def add(db: Session, key: str, value: Any) -> None:
    """Insert a new entry; raises ``IntegrityError`` if ``key`` is taken."""
    try:
        db.execute(insert(KVEntry).values(key=key, value=value))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise


def scan_prefix(db: Session, prefix: str) -> list[tuple[str, Any]]:
    rows = (
        db.query(KVEntry)
        .filter(KVEntry.key.like(f"{_escape_like(prefix)}%", escape="\\"))
        .order_by(KVEntry.key)
        .all()
    )
    # LIKE is case-insensitive on some backends; keep only exact prefix matches.
    return [(row.key, row.value) for row in rows if row.key.startswith(prefix)]


def get_by_prefix(db: Session, prefix: str) -> list[Any]:
    return [value for _, value in scan_prefix(db, prefix)]
