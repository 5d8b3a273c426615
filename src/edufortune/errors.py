"""Error taxonomy for the progress engine."""


class EduFortuneError(Exception):
    """Base class for engine errors."""


class PersistenceError(EduFortuneError):
    """Loading or saving durable state failed."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{message} (key={key!r})")
        self.key = key


class ValidationError(EduFortuneError):
    """A precondition of an engine operation was violated."""


class UnknownCourseError(ValidationError):
    def __init__(self, course_id: str):
        super().__init__(f"Unknown course: {course_id}")
        self.course_id = course_id


class UnknownLessonError(ValidationError):
    def __init__(self, course_id: str, lesson_id: str):
        super().__init__(f"Unknown lesson {lesson_id} in course {course_id}")
        self.course_id = course_id
        self.lesson_id = lesson_id


class NetworkError(EduFortuneError):
    """A simulated network operation timed out or was cancelled."""
