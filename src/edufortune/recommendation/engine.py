"""Rule-based course recommendation, daily tips and challenge tracking."""

import random
from collections import defaultdict
from dataclasses import dataclass
from enum import StrEnum

import structlog

from edufortune.content.catalog import ContentCatalog
from edufortune.content.tips import TIP_POOL
from edufortune.models.course import Course, CourseCategory, DifficultyLevel, Lesson
from edufortune.models.progress import UserLevel, UserPreferences, UserProgress
from edufortune.models.recommendation import (
    FinancialTip,
    LearningChallenge,
    Priority,
    Recommendation,
)

logger = structlog.get_logger()

BASE_CONFIDENCE = 0.5
MIN_CONFIDENCE = 0.6
REASON_SEPARATOR = " • "
WEAK_AREA_THRESHOLD = 80.0


def score_course(
    course: Course,
    user_level: UserLevel,
    completed_course_count: int,
    current_streak: int,
    preferences: UserPreferences,
) -> Recommendation | None:
    """Score how well `course` fits the learner.

    Each matching rule adds to a 0.5 base confidence and contributes a reason.
    Rules may raise the priority but never lower it.

    Returns:
        The recommendation, or None when confidence stays below 0.6.
    """
    confidence = BASE_CONFIDENCE
    priority = Priority.MEDIUM
    reasons: list[str] = []

    def escalate(to: Priority) -> None:
        nonlocal priority
        priority = max(priority, to)

    if course.difficulty == preferences.difficulty_preference:
        confidence += 0.3
        reasons.append("Matches your preferred difficulty level")

    if course.category == CourseCategory.FINANCIAL and preferences.show_financial_tips:
        confidence += 0.2
        escalate(Priority.HIGH)
        reasons.append("Enhances your financial literacy")

    if course.estimated_duration <= preferences.preferred_lesson_length + 10:
        confidence += 0.1
        reasons.append("Fits your preferred lesson length")

    if current_streak > 7:
        confidence += 0.15
        reasons.append("Keep your streak going!")

    if completed_course_count == 0 and course.difficulty == DifficultyLevel.BEGINNER:
        confidence += 0.25
        escalate(Priority.HIGH)
        reasons.append("Perfect for getting started")

    if (
        completed_course_count > 2
        and course.difficulty.rank > preferences.difficulty_preference.rank
    ):
        confidence += 0.2
        reasons.append("Ready for the next challenge")

    if user_level >= UserLevel.INTERMEDIATE and course.category == CourseCategory.BUSINESS:
        confidence += 0.15
        reasons.append("Advance your professional skills")

    # Rounded so float accumulation cannot push an exact 0.6 below the cut.
    if round(confidence, 6) < MIN_CONFIDENCE:
        return None

    return Recommendation(
        course=course,
        reason=REASON_SEPARATOR.join(reasons),
        confidence=min(1.0, round(confidence, 6)),
        priority=priority,
    )


class ChallengeMetric(StrEnum):
    STREAK = "current_streak"
    LESSONS = "total_lessons_completed"
    COURSES = "completed_courses"


@dataclass(frozen=True)
class ChallengeDefinition:
    title: str
    description: str
    reward: str
    metric: ChallengeMetric
    target: int

    def current_value(self, progress: UserProgress) -> int:
        if self.metric == ChallengeMetric.COURSES:
            return len(progress.completed_courses)
        return getattr(progress, self.metric.value)


CHALLENGES: tuple[ChallengeDefinition, ...] = (
    ChallengeDefinition(
        title="7-Day Streak Master",
        description="Study for 7 consecutive days",
        reward="Unlock advanced course",
        metric=ChallengeMetric.STREAK,
        target=7,
    ),
    ChallengeDefinition(
        title="Financial Vocab Expert",
        description="Complete 10 lessons",
        reward="Achievement badge + 100 XP",
        metric=ChallengeMetric.LESSONS,
        target=10,
    ),
    ChallengeDefinition(
        title="Course Completionist",
        description="Complete 3 courses",
        reward="Unlock premium features",
        metric=ChallengeMetric.COURSES,
        target=3,
    ),
)


class RecommendationEngine:
    """Stateless recommender over a progress snapshot and the catalog.

    Args:
        catalog: Course source.
        tips: Tip pool for `select_daily_tip`.
        rng: Random source for tip selection.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        tips: list[FinancialTip] | None = None,
        rng: random.Random | None = None,
    ):
        self.catalog = catalog
        self.tips = list(tips) if tips is not None else list(TIP_POOL)
        self._rng = rng or random.Random()

    def recommend(self, progress: UserProgress, limit: int | None = None) -> list[Recommendation]:
        """Ranked recommendations for unlocked courses: priority, then confidence."""
        recommendations = []
        for course in self.catalog.list_courses():
            if not course.is_unlocked:
                continue
            rec = score_course(
                course,
                user_level=progress.level,
                completed_course_count=len(progress.completed_courses),
                current_streak=progress.current_streak,
                preferences=progress.preferences,
            )
            if rec is not None:
                recommendations.append(rec)

        recommendations.sort(key=lambda r: (r.priority, r.confidence), reverse=True)
        if limit is not None:
            recommendations = recommendations[: max(limit, 0)]
        logger.debug("recommendations_generated", count=len(recommendations))
        return recommendations

    def select_daily_tip(self) -> FinancialTip | None:
        if not self.tips:
            return None
        return self._rng.choice(self.tips)

    def challenge_progress(self, progress: UserProgress) -> list[LearningChallenge]:
        challenges = []
        for definition in CHALLENGES:
            value = definition.current_value(progress)
            challenges.append(
                LearningChallenge(
                    title=definition.title,
                    description=definition.description,
                    reward=definition.reward,
                    current_value=value,
                    target=definition.target,
                    progress=value / definition.target,
                    is_completed=value >= definition.target,
                )
            )
        return challenges

    def next_lesson(self, progress: UserProgress) -> Lesson | None:
        """First lesson of the current course not yet completed."""
        if progress.current_course is None:
            return None
        course = self.catalog.get_course(progress.current_course)
        if course is None:
            return None
        done = set(self.catalog.completed_lessons(course.id))
        return next((lesson for lesson in course.lessons if lesson.id not in done), None)

    def strength_areas(self, progress: UserProgress) -> list[str]:
        completed = len(progress.completed_courses)
        if completed == 0:
            return ["Motivation to learn", "Consistent daily practice"]
        elif completed <= 2:
            return ["Basic vocabulary", "Learning dedication", "Progress tracking"]
        elif completed <= 5:
            return ["Financial concepts", "Vocabulary retention", "Study habits"]
        else:
            return [
                "Advanced terminology",
                "Concept application",
                "Teaching others",
                "Expert knowledge",
            ]

    def weak_areas(self, progress: UserProgress) -> list[str]:
        """Categories whose average lesson score is below 80, weakest first."""
        scores: dict[CourseCategory, list[float]] = defaultdict(list)
        for record in progress.activity_log:
            if record.category is not None:
                scores[record.category].append(record.score)
        averages = {cat: sum(vals) / len(vals) for cat, vals in scores.items()}
        weak = sorted(
            (item for item in averages.items() if item[1] < WEAK_AREA_THRESHOLD),
            key=lambda item: item[1],
        )
        return [f"{cat.value} (average score: {int(avg)}%)" for cat, avg in weak]
