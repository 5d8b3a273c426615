"""Learner progress aggregate and its value types."""

import uuid
from datetime import date, datetime, time
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from edufortune.models.course import CourseCategory, DifficultyLevel


class UserLevel(IntEnum):
    """Learner level, advanced only by experience crossing a threshold."""

    NOVICE = 1
    BEGINNER = 2
    INTERMEDIATE = 3
    ADVANCED = 4
    EXPERT = 5
    MASTER = 6

    @property
    def title(self) -> str:
        return _LEVEL_TITLES[self]

    @property
    def experience_required(self) -> int:
        return _LEVEL_THRESHOLDS[self]

    @property
    def icon(self) -> str:
        return _LEVEL_ICONS[self]

    @property
    def next_level(self) -> "UserLevel | None":
        if self is UserLevel.MASTER:
            return None
        return UserLevel(self + 1)

    @classmethod
    def for_experience(cls, experience: int) -> "UserLevel":
        """Highest level whose threshold is met by `experience`."""
        for level in reversed(cls):
            if experience >= level.experience_required:
                return level
        return cls.NOVICE


_LEVEL_TITLES = {
    UserLevel.NOVICE: "Novice Learner",
    UserLevel.BEGINNER: "Beginner",
    UserLevel.INTERMEDIATE: "Intermediate",
    UserLevel.ADVANCED: "Advanced",
    UserLevel.EXPERT: "Expert",
    UserLevel.MASTER: "Master",
}

_LEVEL_THRESHOLDS = {
    UserLevel.NOVICE: 0,
    UserLevel.BEGINNER: 100,
    UserLevel.INTERMEDIATE: 300,
    UserLevel.ADVANCED: 600,
    UserLevel.EXPERT: 1000,
    UserLevel.MASTER: 1500,
}

_LEVEL_ICONS = {
    UserLevel.NOVICE: "seedling",
    UserLevel.BEGINNER: "leaf.fill",
    UserLevel.INTERMEDIATE: "tree.fill",
    UserLevel.ADVANCED: "star.fill",
    UserLevel.EXPERT: "crown.fill",
    UserLevel.MASTER: "trophy.fill",
}


class AchievementCategory(StrEnum):
    STREAK = "Streak"
    COMPLETION = "Completion"
    TIME = "Time Spent"
    FINANCIAL = "Financial Learning"
    SOCIAL = "Social"


class Achievement(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    icon: str
    unlocked_date: datetime
    category: AchievementCategory


class UserPreferences(BaseModel):
    preferred_languages: list[str] = Field(default_factory=lambda: ["English"])
    difficulty_preference: DifficultyLevel = DifficultyLevel.BEGINNER
    notifications_enabled: bool = True
    daily_reminder_time: time | None = time(19, 0)
    sound_enabled: bool = True
    haptics_enabled: bool = True
    dark_mode_enabled: bool = False
    auto_play_audio: bool = True
    show_financial_tips: bool = True
    preferred_lesson_length: int = Field(default=15, gt=0)  # minutes


class ActivityRecord(BaseModel):
    """One completed lesson attempt; the event log behind analytics."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    lesson_id: str
    course_id: str
    time_spent_minutes: int = Field(ge=0)
    score: float = Field(ge=0.0, le=100.0)
    category: CourseCategory | None = None
    difficulty: DifficultyLevel | None = None


class UserProgress(BaseModel):
    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    total_lessons_completed: int = Field(default=0, ge=0)
    total_time_spent: int = Field(default=0, ge=0)  # minutes
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    level: UserLevel = UserLevel.NOVICE
    experience: int = Field(default=0, ge=0)
    achievements: list[Achievement] = Field(default_factory=list)
    completed_courses: list[str] = Field(default_factory=list)
    current_course: str | None = None
    daily_goal: int = Field(default=15, gt=0)  # minutes per day
    weekly_goal: int = Field(default=105, gt=0)  # minutes per week
    last_activity_date: date | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    activity_log: list[ActivityRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _level_follows_experience(self) -> "UserProgress":
        # Level is derived from experience, whatever the document says.
        self.level = UserLevel.for_experience(self.experience)
        return self

    def has_achievement(self, title: str) -> bool:
        return any(a.title == title for a in self.achievements)

    def recent_achievements(self, limit: int = 5) -> list[Achievement]:
        return self.achievements[-limit:] if limit > 0 else []

    def achievements_in(self, category: AchievementCategory) -> list[Achievement]:
        return [a for a in self.achievements if a.category == category]

    @property
    def experience_to_next_level(self) -> int:
        nxt = self.level.next_level
        if nxt is None:
            return 0
        return max(0, nxt.experience_required - self.experience)

    @property
    def experience_progress(self) -> float:
        """Fraction of the way from the current level to the next one."""
        nxt = self.level.next_level
        if nxt is None:
            return 1.0
        needed = nxt.experience_required - self.level.experience_required
        return (self.experience - self.level.experience_required) / needed
