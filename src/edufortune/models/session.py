"""Lesson session data models."""

from enum import StrEnum

from pydantic import BaseModel, Field


class SessionState(StrEnum):
    """Lesson session lifecycle states."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class LessonResult(BaseModel):
    """Terminal outcome of a lesson attempt, reported to the progress store."""

    lesson_id: str
    course_id: str
    time_spent_minutes: int = Field(ge=0)
    score: float = Field(ge=0.0, le=100.0)
    correct_answers: int = 0
    question_count: int = 0
