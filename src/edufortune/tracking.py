"""Learning event tracking. Events are emitted as structured log lines only."""

from typing import Any

import structlog

logger = structlog.get_logger()


class EventTracker:
    """Logs learner events under the `tracking` channel."""

    def __init__(self) -> None:
        self._log = logger.bind(channel="tracking")

    def track_lesson_start(self, lesson_id: str, course_id: str) -> None:
        self._log.info("lesson_started", lesson_id=lesson_id, course_id=course_id)

    def track_lesson_completion(
        self, lesson_id: str, course_id: str, time_spent_minutes: int, score: float
    ) -> None:
        self._log.info(
            "lesson_completed",
            lesson_id=lesson_id,
            course_id=course_id,
            time_spent_minutes=time_spent_minutes,
            score=round(score, 1),
        )

    def track_quiz_attempt(
        self, question_id: str, is_correct: bool, time_spent_seconds: int = 0
    ) -> None:
        # time_spent_seconds stays 0 until a per-question timer exists
        self._log.debug(
            "quiz_attempt",
            question_id=question_id,
            is_correct=is_correct,
            time_spent_seconds=time_spent_seconds,
        )

    def track_user_action(self, action: str, context: dict[str, Any] | None = None) -> None:
        self._log.info("user_action", action=action, **(context or {}))
