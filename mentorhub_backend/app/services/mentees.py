import csv
from io import StringIO
from typing import Any, Iterable

from sqlalchemy.orm import Session

from app.services import submissions
from app.services.mentors import get_mentor_profile

EXPORT_COLUMNS = ["prn", "name", "batch", "department", "hasInteraction", "hasAcademic", "submittedAt"]


def merge_mentees(
    interactions: Iterable[dict[str, Any]],
    academics: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Fold latest interaction and academic records into one row per PRN.

    Interaction records are applied first, academic second, so on a field-name
    collision the academic value wins.
    """
    mentees: dict[str, dict[str, Any]] = {}
    for flag, records in (("hasInteraction", interactions), ("hasAcademic", academics)):
        for record in records:
            prn = record.get("prn")
            if not prn or not isinstance(prn, str):
                continue
            entry = mentees.setdefault(prn, {"hasInteraction": False, "hasAcademic": False})
            entry.update(record)
            entry[flag] = True
    return list(mentees.values())


def list_mentees(db: Session) -> list[dict[str, Any]]:
    merged = merge_mentees(
        submissions.latest_records(db, "interaction"),
        submissions.latest_records(db, "academic"),
    )
    return sorted(merged, key=lambda m: str(m["prn"]))


def get_mentee_detail(db: Session, prn: str) -> dict[str, Any]:
    return {
        "prn": prn,
        "interactions": submissions.history(db, "interaction", prn),
        "attendance": submissions.history(db, "attendance", prn),
        "academic": submissions.latest_record(db, "academic", prn),
    }


def get_dashboard(db: Session, account_id: str) -> dict[str, Any]:
    return {
        "mentor": get_mentor_profile(db, account_id),
        "mentees": {
            "interactions": submissions.latest_records(db, "interaction"),
            "academic": submissions.latest_records(db, "academic"),
            "attendance": submissions.all_records(db, "attendance"),
        },
    }


def filter_mentees(mentees: list[dict[str, Any]], term: str | None) -> list[dict[str, Any]]:
    if not term:
        return list(mentees)
    needle = term.lower()
    return [
        m for m in mentees
        if any(needle in str(m.get(field) or "").lower() for field in ("name", "prn", "batch"))
    ]


def mentee_stats(mentees: list[dict[str, Any]]) -> dict[str, int]:
    return {
        "totalMentees": len(mentees),
        "withInteractions": sum(1 for m in mentees if m.get("hasInteraction")),
        "withAcademic": sum(1 for m in mentees if m.get("hasAcademic")),
        "pendingSubmissions": sum(1 for m in mentees if not m.get("hasInteraction") or not m.get("hasAcademic")),
    }


def export_mentees_csv(mentees: list[dict[str, Any]]) -> str:
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for mentee in mentees:
        writer.writerow({column: mentee.get(column, "") for column in EXPORT_COLUMNS})
    return buffer.getvalue()
