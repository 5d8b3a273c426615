"""Content catalog with a persisted per-course state overlay."""

import threading

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from edufortune.errors import PersistenceError, UnknownCourseError, UnknownLessonError
from edufortune.models.course import Course, CourseCategory, CourseState, DifficultyLevel, Lesson
from edufortune.storage.backend import KeyValueStore

logger = structlog.get_logger()

COURSES_KEY = "courses"

_states_adapter = TypeAdapter(list[CourseState])


class ContentCatalog:
    """Read access to immutable courses plus the mutable overlay.

    Catalog entries never change. Unlock flags and lesson completion live in
    `CourseState` records keyed by course id; lookups return courses with the
    overlay's unlock flag applied.

    Args:
        courses: Catalog entries, in display order.
        backend: Where the overlay is persisted. None keeps it in memory only.
    """

    def __init__(self, courses: list[Course], backend: KeyValueStore | None = None):
        self._courses = {course.id: course for course in courses}
        self.backend = backend
        self._states: dict[str, CourseState] = {}
        self._lock = threading.Lock()

    def load_state(self) -> None:
        """Load the overlay. Missing or corrupt data leaves it empty."""
        if self.backend is None:
            return
        try:
            raw = self.backend.get(COURSES_KEY)
        except OSError as e:
            logger.warning("course_state_load_failed", error=str(e))
            return
        if raw is None:
            return
        try:
            states = _states_adapter.validate_json(raw)
        except (PydanticValidationError, ValueError) as e:
            logger.warning("course_state_corrupted", error=str(e))
            return
        with self._lock:
            self._states = {s.course_id: s for s in states}

    def save_state(self) -> None:
        """Persist the overlay.

        Raises:
            PersistenceError: The backend rejected the write.
        """
        if self.backend is None:
            return
        with self._lock:
            payload = _states_adapter.dump_json(list(self._states.values()))
        try:
            self.backend.set(COURSES_KEY, payload)
        except (OSError, ValueError) as e:
            raise PersistenceError(COURSES_KEY, f"Failed to save course state: {e}") from e

    def reset_state(self) -> None:
        with self._lock:
            self._states = {}
        if self.backend is not None:
            try:
                self.backend.delete(COURSES_KEY)
            except OSError as e:
                logger.warning("course_state_delete_failed", error=str(e))

    def _effective(self, course: Course) -> Course:
        state = self._states.get(course.id)
        if state is None or state.is_unlocked is None:
            return course
        return course.model_copy(update={"is_unlocked": state.is_unlocked})

    def _state(self, course_id: str) -> CourseState:
        if course_id not in self._states:
            self._states[course_id] = CourseState(course_id=course_id)
        return self._states[course_id]

    def list_courses(self) -> list[Course]:
        with self._lock:
            return [self._effective(c) for c in self._courses.values()]

    def get_course(self, course_id: str) -> Course | None:
        with self._lock:
            course = self._courses.get(course_id)
            return self._effective(course) if course is not None else None

    def require_course(self, course_id: str) -> Course:
        course = self.get_course(course_id)
        if course is None:
            raise UnknownCourseError(course_id)
        return course

    def require_lesson(self, course_id: str, lesson_id: str) -> Lesson:
        lesson = self.require_course(course_id).lesson(lesson_id)
        if lesson is None:
            raise UnknownLessonError(course_id, lesson_id)
        return lesson

    def courses_by_category(self, category: CourseCategory) -> list[Course]:
        return [c for c in self.list_courses() if c.category == category]

    def courses_by_difficulty(self, difficulty: DifficultyLevel) -> list[Course]:
        return [c for c in self.list_courses() if c.difficulty == difficulty]

    def search(self, query: str) -> list[Course]:
        """Case-insensitive match on title, description, language or category."""
        if not query:
            return self.list_courses()
        needle = query.casefold()
        return [
            c
            for c in self.list_courses()
            if needle in c.title.casefold()
            or needle in c.description.casefold()
            or needle in c.language.casefold()
            or needle in c.category.value.casefold()
        ]

    def unlock_course(self, course_id: str) -> Course:
        self.require_course(course_id)
        with self._lock:
            self._state(course_id).is_unlocked = True
        logger.info("course_unlocked", course_id=course_id)
        return self.require_course(course_id)

    def mark_lesson_completed(self, course_id: str, lesson_id: str) -> bool:
        """Record a lesson as completed. Returns True when every lesson of the
        course is now completed."""
        course = self.require_course(course_id)
        if course.lesson(lesson_id) is None:
            raise UnknownLessonError(course_id, lesson_id)
        with self._lock:
            state = self._state(course_id)
            if lesson_id not in state.completed_lessons:
                state.completed_lessons.append(lesson_id)
            done = set(state.completed_lessons)
        return all(lesson.id in done for lesson in course.lessons)

    def completed_lessons(self, course_id: str) -> list[str]:
        with self._lock:
            state = self._states.get(course_id)
            return list(state.completed_lessons) if state else []

    def is_lesson_completed(self, course_id: str, lesson_id: str) -> bool:
        return lesson_id in self.completed_lessons(course_id)

    def course_progress(self, course_id: str) -> float:
        course = self.require_course(course_id)
        if not course.lessons:
            return 0.0
        done = set(self.completed_lessons(course_id))
        return sum(1 for lesson in course.lessons if lesson.id in done) / len(course.lessons)

    def total_lessons(self) -> int:
        return sum(len(c.lessons) for c in self._courses.values())
