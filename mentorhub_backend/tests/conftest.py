"""
MentorHub - test configuration and fixtures
"""
import os
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read at import time, so the environment goes first.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from app.main import app
from app.core.database import get_db
from app.models.base import Base

fake = Faker()

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mentor_data() -> dict:
    return {
        "email": fake.unique.email(),
        "password": "mentorpass123",
        "name": fake.name(),
        "department": "computer",
        "contact": "9876543210",
    }


@pytest.fixture
def registered_mentor(client: TestClient, mentor_data: dict) -> dict:
    response = client.post("/signup", json=mentor_data)
    assert response.status_code == 200
    return {**mentor_data, "id": response.json()["user"]["id"]}


@pytest.fixture
def access_token(client: TestClient, registered_mentor: dict) -> str:
    response = client.post(
        "/signin",
        json={"email": registered_mentor["email"], "password": registered_mentor["password"]},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def auth_headers(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


def make_interaction_form(prn: str = "AB12345678", name: str = "J Doe", **overrides) -> dict:
    form = {
        "prn": prn,
        "name": name,
        "batch": "2022-2026",
        "semester": "5",
        "academicYear": "2024-25",
        "mentorName": "Prof. Kulkarni",
        "meetingDate": "2024-09-12",
        "meetingType": "in-person",
        "discussionTopics": ["Career Planning", "Time Management"],
        "facultyFeedback": {
            "teachingQuality": "Good",
            "courseContent": "Excellent",
            "communication": "",
            "availability": "",
        },
        "difficulties": "Data structures assignments",
        "suggestions": "More lab hours",
        "personalChallenges": "",
        "careerGoals": "Backend engineering",
        "extracurriculars": "",
        "overallRating": "4",
        "additionalComments": "",
    }
    form.update(overrides)
    return form


def make_attendance_form(prn: str = "AB12345678", name: str = "J Doe", **overrides) -> dict:
    form = {
        "prn": prn,
        "name": name,
        "batch": "2022-2026",
        "mentorName": "Prof. Kulkarni",
        "sessionDate": "2024-09-12",
        "sessionTime": "14:30",
        "sessionDuration": "45",
        "sessionType": "individual",
        "attendanceStatus": "present",
        "sessionTopic": "",
        "sessionObjectives": "",
        "participationLevel": "Active",
        "punctuality": "On Time",
        "preparedness": "Prepared",
        "engagementLevel": "",
        "questionsAsked": "1-2",
        "followUpRequired": "no",
        "nextSessionPlanned": "",
        "nextSessionDate": "",
        "additionalNotes": "",
    }
    form.update(overrides)
    return form


def make_academic_form(prn: str = "AB12345678", name: str = "J Doe", **overrides) -> dict:
    form = {
        "prn": prn,
        "name": name,
        "batch": "2022-2026",
        "department": "computer",
        "currentSemester": "5",
        "academicYear": "2024-25",
        "twelfthBoard": "cbse",
        "twelfthPercentage": "88.4",
        "twelfthPassingYear": "2022",
        "entranceExam": "mht-cet",
        "personalEmail": "jdoe@example.com",
        "contactNumber": "+91 9876543210",
        "currentSemesterCGPA": "8.2",
        "backlogs": "0",
    }
    form.update(overrides)
    return form
