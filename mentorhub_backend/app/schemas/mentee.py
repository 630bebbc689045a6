from typing import Any

from pydantic import BaseModel, ConfigDict

from app.schemas.auth import MentorProfile


class SubmissionResponse(BaseModel):
    message: str
    id: str


class MenteeSummary(BaseModel):
    """One row per PRN: union of the latest interaction and academic records."""

    model_config = ConfigDict(extra="allow")

    prn: str
    name: Any = None
    hasInteraction: bool = False
    hasAcademic: bool = False


class MenteeListResponse(BaseModel):
    mentees: list[MenteeSummary]


class MenteeDetailResponse(BaseModel):
    prn: str
    interactions: list[dict[str, Any]]
    attendance: list[dict[str, Any]]
    academic: dict[str, Any] | None = None


class MenteeCollections(BaseModel):
    interactions: list[dict[str, Any]]
    academic: list[dict[str, Any]]
    attendance: list[dict[str, Any]]


class DashboardResponse(BaseModel):
    mentor: MentorProfile | None = None
    mentees: MenteeCollections


class MenteeStats(BaseModel):
    totalMentees: int
    withInteractions: int
    withAcademic: int
    pendingSubmissions: int
