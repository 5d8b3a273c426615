"""Recommendation, tip and challenge models."""

from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field

from edufortune.models.course import Course, DifficultyLevel


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4


class Recommendation(BaseModel):
    course: Course
    reason: str
    confidence: float = Field(ge=0.0, le=1.0)
    priority: Priority = Priority.MEDIUM


class TipCategory(StrEnum):
    BUDGETING = "Budgeting"
    INVESTING = "Investing"
    SAVING = "Saving"
    CREDIT_DEBT = "Credit & Debt"
    CAREER_FINANCE = "Career Finance"
    LANGUAGE_LEARNING = "Language Learning"


class FinancialTip(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    category: TipCategory
    difficulty: DifficultyLevel
    related_vocabulary: list[str] = Field(default_factory=list)
    actionable: bool = True


class LearningChallenge(BaseModel):
    title: str
    description: str
    reward: str
    current_value: int
    target: int
    progress: float  # raw ratio, may exceed 1.0
    is_completed: bool

    @property
    def display_progress(self) -> float:
        return max(0.0, min(1.0, self.progress))
