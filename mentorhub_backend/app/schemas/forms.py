"""Field rules for the three mentee forms.

The models validate a form's local field state before it is sent; the state
itself (not the model dump) is what gets submitted, so unknown keys are kept.
"""

from datetime import date, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

PRN_PATTERN = r"^[0-9A-Z]{10,12}$"
BATCH_PATTERN = r"^[0-9]{4}-[0-9]{4}$"
ACADEMIC_YEAR_PATTERN = r"^[0-9]{4}-[0-9]{2}$"
CONTACT_PATTERN = r"^[0-9+\-\s]{10,15}$"

DISCUSSION_TOPICS = (
    "Academic Performance",
    "Course Selection",
    "Career Planning",
    "Personal Issues",
    "Extracurricular Activities",
    "Study Techniques",
    "Time Management",
    "Stress Management",
)

Semester = Literal["1", "2", "3", "4", "5", "6", "7", "8"]
FeedbackRating = Literal["Excellent", "Good", "Average", "Poor"]
DiscussionTopic = Literal[DISCUSSION_TOPICS]  # type: ignore[valid-type]

# Messages shown next to a field whose value fails its format check.
FIELD_HINTS = {
    "prn": "PRN should be 10-12 characters long",
    "batch": "Batch should be in format YYYY-YYYY",
    "academicYear": "Academic year should be in format YYYY-YY",
    "contactNumber": "Contact number should be 10-15 digits",
    "personalEmail": "Please enter a valid email address",
    "twelfthPercentage": "12th percentage should be between 0 and 100",
    "twelfthPassingYear": "Passing year should be between 2000 and 2030",
}


class _FormBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    prn: str = Field(..., pattern=PRN_PATTERN)
    name: str = Field(..., min_length=1)
    batch: str = Field(..., pattern=BATCH_PATTERN)


class FacultyFeedback(BaseModel):
    teachingQuality: FeedbackRating
    courseContent: FeedbackRating
    communication: FeedbackRating | Literal[""] = ""
    availability: FeedbackRating | Literal[""] = ""


class InteractionForm(_FormBase):
    semester: Semester
    academicYear: str = Field(..., pattern=ACADEMIC_YEAR_PATTERN)
    mentorName: str = Field(..., min_length=1)
    meetingDate: date
    meetingType: Literal["in-person", "online", "phone"]
    discussionTopics: list[DiscussionTopic] = Field(..., min_length=1)
    facultyFeedback: FacultyFeedback
    difficulties: str = Field(..., min_length=1)
    suggestions: str = Field(..., min_length=1)
    personalChallenges: str = ""
    careerGoals: str = Field(..., min_length=1)
    extracurriculars: str = ""
    overallRating: Literal["1", "2", "3", "4", "5"]
    additionalComments: str = ""


class AttendanceForm(_FormBase):
    mentorName: str = Field(..., min_length=1)
    sessionDate: date
    sessionTime: time
    sessionDuration: Literal["15", "30", "45", "60", "90", "120"]
    sessionType: Literal["individual", "group", "online", "workshop"]
    attendanceStatus: Literal["present", "late", "absent", "excused"]
    sessionTopic: str = ""
    sessionObjectives: str = ""
    participationLevel: Literal["Very Active", "Active", "Moderate", "Passive"]
    punctuality: Literal["On Time", "5-10 min late", "10+ min late", "Very Late"]
    preparedness: Literal["Well Prepared", "Prepared", "Somewhat Prepared", "Not Prepared"]
    engagementLevel: str = ""
    questionsAsked: Literal["", "0", "1-2", "3-5", "5+"] = ""
    followUpRequired: Literal["", "yes", "no"] = ""
    nextSessionPlanned: Literal["", "yes", "no"] = ""
    nextSessionDate: date | Literal[""] = ""
    additionalNotes: str = ""


class AcademicForm(_FormBase):
    department: Literal["computer", "mechanical", "electrical", "civil", "electronics", "it"]
    currentSemester: Semester
    academicYear: str = Field(..., pattern=ACADEMIC_YEAR_PATTERN)

    twelfthBoard: Literal["maharashtra", "cbse", "icse", "other"]
    twelfthPercentage: float = Field(..., ge=0, le=100)
    twelfthPassingYear: int = Field(..., ge=2000, le=2030)

    entranceExam: Literal["jee-main", "mht-cet", "jee-advanced", "other"]
    entranceScore: str = ""
    entranceRank: str = ""

    previousSemesterGPA: str = ""
    currentSemesterCGPA: str = ""
    backlogs: str = ""
    backlogSubjects: str = ""

    hobbies: str = ""
    interests: str = ""
    skills: str = ""
    strengths: str = ""
    weaknesses: str = ""

    fatherOccupation: str = ""
    motherOccupation: str = ""
    familyIncome: str = ""

    personalEmail: EmailStr
    contactNumber: str = Field(..., pattern=CONTACT_PATTERN)
    alternateContact: str = ""
    permanentAddress: str = ""
    currentAddress: str = ""

    extracurricularActivities: str = ""
    achievements: str = ""
    futureGoals: str = ""
    specialNeeds: str = ""
    medicalHistory: str = ""


FORM_MODELS: dict[str, type[_FormBase]] = {
    "interaction": InteractionForm,
    "attendance": AttendanceForm,
    "academic": AcademicForm,
}

# Dotted paths address the one nested block (facultyFeedback).
REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "interaction": (
        "prn", "name", "batch", "semester", "academicYear", "mentorName",
        "meetingDate", "meetingType", "facultyFeedback.teachingQuality",
        "facultyFeedback.courseContent", "difficulties", "suggestions",
        "careerGoals", "overallRating",
    ),
    "attendance": (
        "prn", "name", "batch", "mentorName", "sessionDate", "sessionTime",
        "sessionDuration", "sessionType", "attendanceStatus",
        "participationLevel", "punctuality", "preparedness",
    ),
    "academic": (
        "prn", "name", "batch", "department", "currentSemester", "academicYear",
        "twelfthBoard", "twelfthPercentage", "twelfthPassingYear",
        "entranceExam", "personalEmail", "contactNumber",
    ),
}


def empty_form_state(kind: str) -> dict:
    """Blank field state for a form, matching what a fresh form shows."""
    model = FORM_MODELS[kind]
    state: dict = {}
    for field_name in model.model_fields:
        if field_name == "discussionTopics":
            state[field_name] = []
        elif field_name == "facultyFeedback":
            state[field_name] = {key: "" for key in FacultyFeedback.model_fields}
        else:
            state[field_name] = ""
    return state
