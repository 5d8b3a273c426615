"""Progress store: sole writer of the learner's progress aggregate."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from pydantic import ValidationError as PydanticValidationError

from edufortune.clock import Clock, SystemClock
from edufortune.errors import PersistenceError, ValidationError
from edufortune.models.course import CourseCategory, DifficultyLevel
from edufortune.models.progress import (
    Achievement,
    AchievementCategory,
    ActivityRecord,
    UserLevel,
    UserProgress,
)
from edufortune.storage.backend import KeyValueStore

logger = structlog.get_logger()

PROGRESS_KEY = "progress"

LESSON_EXPERIENCE = 10
COURSE_EXPERIENCE = 50
STREAK_MILESTONES = (7, 30, 100, 365)
COMPLETION_MILESTONES = (1, 5, 10, 25)


def streak_title(milestone: int) -> str:
    return f"{milestone} Day Streak"


def completion_title(milestone: int) -> str:
    return f"{milestone} Course{'' if milestone == 1 else 's'} Completed"


class ProgressStore:
    """Owns the single `UserProgress` aggregate and enforces its invariants.

    Mutations only touch the in-memory aggregate. Persisting is a separate,
    best-effort step (`persist`) so a storage failure never costs the learner
    an already-applied lesson result.

    Args:
        backend: Key-value document store.
        clock: Source of "today" for streak updates.
        progress: Initial aggregate; defaults to a fresh profile until `load`.
        default_daily_goal: Daily goal, in minutes, given to fresh profiles.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        clock: Clock | None = None,
        progress: UserProgress | None = None,
        default_daily_goal: int = 15,
    ):
        self.backend = backend
        self.clock = clock or SystemClock()
        self.default_daily_goal = default_daily_goal
        self._progress = progress or self._fresh()
        self._lock = threading.RLock()
        self.last_error: PersistenceError | None = None

    def _fresh(self) -> UserProgress:
        return UserProgress(
            daily_goal=self.default_daily_goal,
            weekly_goal=self.default_daily_goal * 7,
        )

    @property
    def progress(self) -> UserProgress:
        """The live aggregate. Readers outside the store should use `snapshot`."""
        return self._progress

    def snapshot(self) -> UserProgress:
        """Deep copy of the aggregate, consistent with respect to mutations."""
        with self._lock:
            return self._progress.model_copy(deep=True)

    @contextmanager
    def transaction(self) -> Iterator[UserProgress]:
        """Hold the store lock across several transitions.

        `snapshot` blocks until the block exits, so readers see either none
        or all of the changes made inside it.
        """
        with self._lock:
            yield self._progress

    # Persistence

    def load(self) -> UserProgress:
        """Load persisted progress, falling back to a fresh profile."""
        try:
            raw = self.backend.get(PROGRESS_KEY)
        except OSError as e:
            logger.warning("progress_load_failed", error=str(e))
            raw = None

        progress: UserProgress | None = None
        if raw is not None:
            try:
                progress = UserProgress.model_validate_json(raw)
            except (PydanticValidationError, ValueError) as e:
                logger.warning("progress_corrupted", error=str(e))

        if progress is None:
            progress = self._fresh()
            logger.info("progress_initialized", user_id=progress.user_id)

        with self._lock:
            self._progress = progress
        return progress

    def save(self, progress: UserProgress | None = None) -> None:
        """Serialize the aggregate.

        Raises:
            PersistenceError: The backend rejected the write.
        """
        with self._lock:
            target = progress if progress is not None else self._progress
            payload = target.model_dump_json().encode("utf-8")
        try:
            self.backend.set(PROGRESS_KEY, payload)
        except (OSError, ValueError) as e:
            raise PersistenceError(PROGRESS_KEY, f"Failed to save progress: {e}") from e
        self.last_error = None

    def persist(self) -> bool:
        """Best-effort save. Failures are kept on `last_error`, never raised."""
        try:
            self.save()
        except PersistenceError as e:
            self.last_error = e
            logger.error("progress_save_failed", error=str(e))
            return False
        return True

    # Transitions

    def add_experience(self, points: int) -> None:
        if isinstance(points, bool) or not isinstance(points, int):
            raise ValidationError(f"Experience points must be an integer, got {points!r}")
        if points < 0:
            raise ValidationError(f"Experience points must be non-negative, got {points}")
        with self._lock:
            p = self._progress
            p.experience += points
            new_level = UserLevel.for_experience(p.experience)
            if new_level > p.level:
                old_level = p.level
                p.level = new_level
                self._unlock(
                    Achievement(
                        title="Level Up!",
                        description=f"Reached {new_level.title} level",
                        icon=new_level.icon,
                        unlocked_date=self.clock.now(),
                        category=AchievementCategory.COMPLETION,
                    )
                )
                logger.info(
                    "level_changed",
                    old_level=old_level.name,
                    new_level=new_level.name,
                    experience=p.experience,
                )

    def complete_lesson(self) -> None:
        with self._lock:
            self._progress.total_lessons_completed += 1
            self.add_experience(LESSON_EXPERIENCE)
            self.update_streak()

    def record_lesson(
        self,
        lesson_id: str,
        course_id: str,
        time_spent_minutes: int,
        score: float,
        category: CourseCategory | None = None,
        difficulty: DifficultyLevel | None = None,
    ) -> ActivityRecord:
        """Log a completed lesson attempt, then apply `complete_lesson`.

        Raises:
            ValidationError: Negative time or a score outside 0-100.
        """
        try:
            record = ActivityRecord(
                timestamp=self.clock.now(),
                lesson_id=lesson_id,
                course_id=course_id,
                time_spent_minutes=time_spent_minutes,
                score=score,
                category=category,
                difficulty=difficulty,
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e
        with self._lock:
            self._progress.activity_log.append(record)
            self._progress.total_time_spent += time_spent_minutes
            self.complete_lesson()
        return record

    def complete_course(self, course_id: str) -> bool:
        """Mark a course completed. Returns False if it already was."""
        with self._lock:
            p = self._progress
            if course_id in p.completed_courses:
                return False
            p.completed_courses.append(course_id)
            self.add_experience(COURSE_EXPERIENCE)
            self._check_completion_milestones()
        logger.info("course_completed", course_id=course_id)
        return True

    def update_streak(self) -> None:
        with self._lock:
            p = self._progress
            today = self.clock.today()
            last = p.last_activity_date

            if last == today:
                return
            if last is not None and (today - last).days == 1:
                p.current_streak += 1
            else:
                p.current_streak = 1

            p.last_activity_date = today
            if p.current_streak > p.longest_streak:
                p.longest_streak = p.current_streak
            self._check_streak_milestones()

    def _check_streak_milestones(self) -> None:
        p = self._progress
        for milestone in STREAK_MILESTONES:
            title = streak_title(milestone)
            if p.current_streak == milestone and not p.has_achievement(title):
                self._unlock(
                    Achievement(
                        title=title,
                        description=f"Studied for {milestone} consecutive days",
                        icon="flame.fill",
                        unlocked_date=self.clock.now(),
                        category=AchievementCategory.STREAK,
                    )
                )

    def _check_completion_milestones(self) -> None:
        p = self._progress
        count = len(p.completed_courses)
        for milestone in COMPLETION_MILESTONES:
            title = completion_title(milestone)
            if count == milestone and not p.has_achievement(title):
                plural = "" if milestone == 1 else "s"
                self._unlock(
                    Achievement(
                        title=title,
                        description=f"Completed {milestone} course{plural}",
                        icon="checkmark.seal.fill",
                        unlocked_date=self.clock.now(),
                        category=AchievementCategory.COMPLETION,
                    )
                )

    def _unlock(self, achievement: Achievement) -> None:
        self._progress.achievements.append(achievement)
        logger.info(
            "achievement_unlocked",
            title=achievement.title,
            category=achievement.category.value,
        )

    # Settings-like updates

    def set_current_course(self, course_id: str | None) -> None:
        with self._lock:
            self._progress.current_course = course_id

    def set_daily_goal(self, minutes: int) -> None:
        """Set the daily goal; the weekly goal follows as seven days' worth."""
        if minutes <= 0:
            raise ValidationError(f"Daily goal must be positive, got {minutes}")
        with self._lock:
            self._progress.daily_goal = minutes
            self._progress.weekly_goal = minutes * 7

    def set_weekly_goal(self, minutes: int) -> None:
        if minutes <= 0:
            raise ValidationError(f"Weekly goal must be positive, got {minutes}")
        with self._lock:
            self._progress.weekly_goal = minutes

    def update_preferences(self, **changes) -> None:
        with self._lock:
            current = self._progress.preferences.model_dump()
            unknown = set(changes) - set(current)
            if unknown:
                raise ValidationError(f"Unknown preferences: {', '.join(sorted(unknown))}")
            try:
                updated = type(self._progress.preferences).model_validate({**current, **changes})
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e
            self._progress.preferences = updated

    def reset(self) -> UserProgress:
        """Replace the aggregate with a fresh profile and drop the saved copy."""
        with self._lock:
            self._progress = self._fresh()
        try:
            self.backend.delete(PROGRESS_KEY)
        except OSError as e:
            logger.warning("progress_delete_failed", error=str(e))
        logger.info("progress_reset", user_id=self._progress.user_id)
        return self._progress
