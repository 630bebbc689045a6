from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import service_guard
from app.models.account import Account
from app.schemas.auth import SigninRequest, SigninResponse, SignupRequest, SignupResponse
from app.schemas.mentee import (
    DashboardResponse,
    MenteeDetailResponse,
    MenteeListResponse,
    MenteeStats,
    SubmissionResponse,
)
from app.services import mentees, mentors, submissions
from app.services.auth import get_current_account

router = APIRouter()


# ---- Mentor authentication ----

@router.post("/signup", response_model=SignupResponse)
def signup_endpoint(payload: SignupRequest, db: Session = Depends(get_db)):
    with service_guard("Failed to create account"):
        account = mentors.signup(db, payload)
    return {"message": "Mentor account created successfully", "user": account}


@router.post("/signin", response_model=SigninResponse)
def signin_endpoint(payload: SigninRequest, db: Session = Depends(get_db)):
    with service_guard("Login failed"):
        account, token, mentor = mentors.signin(db, payload)
    return {
        "message": "Login successful",
        "user": account,
        "access_token": token,
        "mentor": mentor,
    }


# ---- Mentee form submissions (anonymous) ----

def _submit(db: Session, kind: str, form: dict[str, Any]) -> dict[str, str]:
    with service_guard(f"Failed to submit {kind} form"):
        key, _ = submissions.submit(db, kind, form)
    return {"message": submissions.SUCCESS_MESSAGES[kind], "id": key}


@router.post("/mentee/interaction", response_model=SubmissionResponse)
def submit_interaction(form: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return _submit(db, "interaction", form)


@router.post("/mentee/attendance", response_model=SubmissionResponse)
def submit_attendance(form: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return _submit(db, "attendance", form)


@router.post("/mentee/academic", response_model=SubmissionResponse)
def submit_academic(form: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return _submit(db, "academic", form)


# ---- Mentor dashboard (bearer token) ----

@router.get("/mentor/dashboard", response_model=DashboardResponse)
def dashboard_endpoint(
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    with service_guard("Failed to fetch dashboard data"):
        return mentees.get_dashboard(db, account.id)


@router.get("/mentor/mentees", response_model=MenteeListResponse)
def list_mentees_endpoint(
    search: str | None = Query(None, description="Case-insensitive match on name, PRN or batch"),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    with service_guard("Failed to fetch mentees data"):
        rows = mentees.filter_mentees(mentees.list_mentees(db), search)
    return {"mentees": rows}


@router.get("/mentor/mentees/export")
def export_mentees_endpoint(
    search: str | None = Query(None),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    with service_guard("Failed to export mentees data"):
        body = mentees.export_mentees_csv(mentees.filter_mentees(mentees.list_mentees(db), search))
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="mentees.csv"'},
    )


@router.get("/mentor/stats", response_model=MenteeStats)
def mentee_stats_endpoint(
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    with service_guard("Failed to fetch mentee statistics"):
        return mentees.mentee_stats(mentees.list_mentees(db))


@router.get("/mentor/mentee/{prn}", response_model=MenteeDetailResponse)
def mentee_detail_endpoint(
    prn: str,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    with service_guard("Failed to fetch mentee data"):
        return mentees.get_mentee_detail(db, prn)
