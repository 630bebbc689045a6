"""Append-only mentee form submissions.

History records live under ``<kind>:<prn>:<epoch millis>``. The latest record
per PRN is worked out at read time from that history (maximum ``submittedAt``),
so no write path has a second key to keep in sync.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationFailed
from app.core.logging_config import logger
from app.services import kv_store

KINDS = ("interaction", "attendance", "academic")

SUCCESS_MESSAGES = {
    "interaction": "Interaction form submitted successfully",
    "attendance": "Attendance submitted successfully",
    "academic": "Academic details submitted successfully",
}


def history_prefix(kind: str, prn: str | None = None) -> str:
    return f"{kind}:" if prn is None else f"{kind}:{prn}:"


def _store_history(db: Session, kind: str, prn: str, submitted_at: datetime, record: dict[str, Any]) -> str:
    millis = int(submitted_at.timestamp() * 1000)
    # Insert-only: a key already taken (same millisecond) moves on to the next one.
    while True:
        key = f"{kind}:{prn}:{millis}"
        try:
            kv_store.add(db, key, record)
            return key
        except IntegrityError:
            millis += 1


def _record_order(item: tuple[str, dict[str, Any]]) -> tuple[str, str]:
    key, record = item
    return record.get("submittedAt") or "", key


def submit(db: Session, kind: str, form: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    if kind not in KINDS:
        raise ValueError(f"Unknown submission kind '{kind}'")
    if not form.get("prn") or not form.get("name"):
        raise ValidationFailed("PRN and name are required")
    if not isinstance(form["prn"], str):
        raise ValidationFailed("PRN must be a string")

    prn = form["prn"]
    submitted_at = datetime.now(timezone.utc)
    record = {**form, "kind": kind, "submittedAt": submitted_at.isoformat()}
    key = _store_history(db, kind, prn, submitted_at, record)
    logger.info(f"Stored {kind} submission {key}")
    return key, record


def history(db: Session, kind: str, prn: str) -> list[dict[str, Any]]:
    return kv_store.get_by_prefix(db, history_prefix(kind, prn))


def all_records(db: Session, kind: str) -> list[dict[str, Any]]:
    return kv_store.get_by_prefix(db, history_prefix(kind))


def latest_records(db: Session, kind: str) -> list[dict[str, Any]]:
    """Most recent record of ``kind`` for every PRN, in first-seen PRN order."""
    latest: dict[str, tuple[str, dict[str, Any]]] = {}
    for key, record in kv_store.scan_prefix(db, history_prefix(kind)):
        prn = record.get("prn")
        if not prn or not isinstance(prn, str):
            continue
        current = latest.get(prn)
        if current is None or _record_order((key, record)) > _record_order(current):
            latest[prn] = (key, record)
    return [record for _, record in latest.values()]


def latest_record(db: Session, kind: str, prn: str) -> dict[str, Any] | None:
    entries = kv_store.scan_prefix(db, history_prefix(kind, prn))
    if not entries:
        return None
    return max(entries, key=_record_order)[1]
