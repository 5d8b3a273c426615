"""Lesson attempt state machine: NotStarted -> InProgress -> Completed."""

from collections.abc import Callable

import structlog

from edufortune.errors import ValidationError
from edufortune.models.course import Lesson, Question
from edufortune.models.session import LessonResult, SessionState
from edufortune.tracking import EventTracker

logger = structlog.get_logger()

UNANSWERED = -1


class LessonSession:
    """Tracks one attempt at a lesson.

    Answers are kept as a sparse list indexed by question position, with
    `UNANSWERED` for positions the learner skipped. On completion the score is
    computed over every question and the result is handed to `on_complete`.

    Args:
        lesson: Lesson being attempted.
        course_id: Course the lesson belongs to.
        on_complete: Called once with the `LessonResult` when the attempt ends.
        tracker: Receives quiz attempt events.
    """

    def __init__(
        self,
        lesson: Lesson,
        course_id: str,
        on_complete: Callable[[LessonResult], None] | None = None,
        tracker: EventTracker | None = None,
    ):
        self.lesson = lesson
        self.course_id = course_id
        self._on_complete = on_complete
        self._tracker = tracker or EventTracker()
        self.state = SessionState.NOT_STARTED
        self.current_question_index = 0
        self.selected_answers: list[int] = []
        self.score = 0.0
        self.result: LessonResult | None = None

    @property
    def question_count(self) -> int:
        return len(self.lesson.questions)

    @property
    def completed(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def current_question(self) -> Question | None:
        if self.state != SessionState.IN_PROGRESS or not self.question_count:
            return None
        return self.lesson.questions[self.current_question_index]

    @property
    def progress(self) -> float:
        """Share of questions passed so far (cursor position / question count)."""
        if not self.question_count:
            return 0.0
        if self.completed:
            return 1.0
        return self.current_question_index / self.question_count

    def _reset(self) -> None:
        self.current_question_index = 0
        self.selected_answers = []
        self.score = 0.0
        self.result = None

    def _require_in_progress(self, action: str) -> None:
        if self.state != SessionState.IN_PROGRESS:
            raise ValidationError(f"Cannot {action}: lesson session is {self.state.value}")

    def start(self, lesson: Lesson | None = None) -> None:
        if lesson is not None:
            self.lesson = lesson
        self._reset()
        self.state = SessionState.IN_PROGRESS
        logger.debug("lesson_session_started", lesson_id=self.lesson.id)

    def select_answer(self, index: int) -> None:
        self._require_in_progress("select an answer")
        question = self.current_question
        if question is None:
            raise ValidationError(f"Lesson {self.lesson.id} has no questions")
        if not 0 <= index < len(question.options):
            raise ValidationError(
                f"Answer index {index} out of range for {len(question.options)} options"
            )

        while len(self.selected_answers) <= self.current_question_index:
            self.selected_answers.append(UNANSWERED)
        self.selected_answers[self.current_question_index] = index

        self._tracker.track_quiz_attempt(
            question_id=question.id,
            is_correct=index == question.correct_answer,
            time_spent_seconds=0,
        )

    def next(self) -> None:
        self._require_in_progress("advance")
        if self.current_question_index >= self.question_count - 1:
            self._complete()
        else:
            self.current_question_index += 1

    def previous(self) -> None:
        if self.completed:
            return
        self._require_in_progress("go back")
        if self.current_question_index > 0:
            self.current_question_index -= 1

    def finish(self) -> LessonResult:
        """End the attempt now; unanswered questions count as wrong."""
        self._require_in_progress("finish")
        return self._complete()

    def retry(self) -> None:
        """Discard this attempt and start again with the same lesson."""
        self.start()

    def answer_at(self, position: int) -> int:
        if position < len(self.selected_answers):
            return self.selected_answers[position]
        return UNANSWERED

    def is_correct(self, position: int) -> bool:
        return self.answer_at(position) == self.lesson.questions[position].correct_answer

    def correct_count(self) -> int:
        return sum(1 for i in range(self.question_count) if self.is_correct(i))

    def _calculate_score(self) -> float:
        if not self.question_count:
            return 0.0
        return 100 * self.correct_count() / self.question_count

    def _complete(self) -> LessonResult:
        self.score = self._calculate_score()
        self.state = SessionState.COMPLETED
        self.result = LessonResult(
            lesson_id=self.lesson.id,
            course_id=self.course_id,
            time_spent_minutes=self.lesson.duration,
            score=self.score,
            correct_answers=self.correct_count(),
            question_count=self.question_count,
        )
        logger.info(
            "lesson_session_completed",
            lesson_id=self.lesson.id,
            score=round(self.score, 1),
        )
        if self._on_complete is not None:
            self._on_complete(self.result)
        return self.result
