"""Read-only analytics and report models."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from edufortune.models.course import CourseCategory, DifficultyLevel


class StudyFrequency(StrEnum):
    """Learner frequency class derived from the current streak."""

    DAILY = "daily"
    FREQUENT = "frequent"
    MODERATE = "moderate"
    OCCASIONAL = "occasional"
    RARE = "rare"

    @classmethod
    def from_streak(cls, streak: int) -> "StudyFrequency":
        if streak >= 30:
            return cls.DAILY
        elif streak >= 14:
            return cls.FREQUENT
        elif streak >= 7:
            return cls.MODERATE
        elif streak >= 3:
            return cls.OCCASIONAL
        else:
            return cls.RARE

    @property
    def description(self) -> str:
        return f"{self.value.capitalize()} learner"


class ConsistencyRating(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @classmethod
    def from_streak(cls, streak: int) -> "ConsistencyRating":
        if streak >= 30:
            return cls.EXCELLENT
        elif streak >= 14:
            return cls.GOOD
        elif streak >= 7:
            return cls.FAIR
        else:
            return cls.NEEDS_IMPROVEMENT


class TimeRange(StrEnum):
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    YEAR = "year"

    @property
    def days(self) -> int:
        return {
            TimeRange.WEEK: 7,
            TimeRange.MONTH: 30,
            TimeRange.THREE_MONTHS: 90,
            TimeRange.YEAR: 365,
        }[self]


class LearningAnalytics(BaseModel):
    total_study_time: int  # minutes
    average_session_length: float  # minutes
    study_frequency: StudyFrequency
    preferred_study_times: list[int] = Field(default_factory=list)  # hours 0-23
    most_productive_days: list[str] = Field(default_factory=list)
    learning_velocity: float
    retention_rate: float  # percentage
    consistency_score: float  # 0-100


class CategoryPerformance(BaseModel):
    category: CourseCategory
    accuracy: float
    time_spent: int
    courses_completed: int
    average_score: float
    attempts: int = 0


class DifficultyMetric(BaseModel):
    difficulty: DifficultyLevel
    success_rate: float
    average_attempts: float
    time_per_lesson: float


class LearningPoint(BaseModel):
    date: date
    cumulative_lessons: int
    skill_level: float
    confidence: float


class StreakAnalysis(BaseModel):
    current_streak: int
    longest_streak: int
    average_streak_length: float
    streak_breaks: int
    consistency_rating: ConsistencyRating


class CourseTimeMetric(BaseModel):
    course_id: str
    course_title: str
    estimated_time: int
    actual_time: int
    efficiency: float  # actual / estimated


class PerformanceMetrics(BaseModel):
    overall_accuracy: float
    category_performance: list[CategoryPerformance]
    difficulty_progression: list[DifficultyMetric]
    learning_curve: list[LearningPoint]
    streak_analysis: StreakAnalysis
    time_to_completion: list[CourseTimeMetric]
    improvement_areas: list[str]
    strong_areas: list[str]


class StudyDataPoint(BaseModel):
    date: date
    minutes: int
    lessons_completed: int


class WeeklyReport(BaseModel):
    week_of: date
    total_study_time: int  # minutes
    lessons_completed: int
    average_accuracy: float
    streak_maintained: bool
    top_category: str
    improvement_from_last_week: float  # percentage


class MonthlyReport(BaseModel):
    month_of: date
    total_study_hours: float
    courses_completed: int
    skill_level_growth: float  # score points vs the previous 30 days
    consistency_score: float
    achievements_unlocked: int
    top_achievement: str
