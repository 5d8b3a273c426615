"""Learning service: the entry point UI collaborators call into."""

from collections.abc import Callable
from datetime import date

import structlog

from edufortune.analysis.analytics import AnalyticsAggregator
from edufortune.analysis.report import export_progress_report
from edufortune.clock import Clock, SystemClock
from edufortune.config import Settings
from edufortune.content.catalog import ContentCatalog
from edufortune.content.samples import SAMPLE_COURSES
from edufortune.errors import PersistenceError, ValidationError
from edufortune.learning.session import LessonSession
from edufortune.models.course import Course
from edufortune.models.progress import UserProgress
from edufortune.models.recommendation import FinancialTip, LearningChallenge, Recommendation
from edufortune.models.session import LessonResult
from edufortune.network.simulated import SimulatedNetwork
from edufortune.recommendation.engine import RecommendationEngine
from edufortune.storage.backend import JsonFileStore
from edufortune.storage.progress_store import ProgressStore
from edufortune.tracking import EventTracker

logger = structlog.get_logger()

ProgressListener = Callable[[UserProgress], None]


class LearningService:
    """Wires the progress store, catalog, recommender and analytics together.

    All durable changes go through the progress store; this class adds
    course-overlay bookkeeping, best-effort persistence and change
    notification. Listeners registered with `subscribe` receive a snapshot
    after every state change.
    """

    def __init__(
        self,
        store: ProgressStore,
        catalog: ContentCatalog,
        recommender: RecommendationEngine,
        analytics: AnalyticsAggregator,
        network: SimulatedNetwork,
        tracker: EventTracker | None = None,
        clock: Clock | None = None,
        recommendation_limit: int = 3,
    ):
        self.store = store
        self.catalog = catalog
        self.recommender = recommender
        self.analytics = analytics
        self.network = network
        self.tracker = tracker or EventTracker()
        self.clock = clock or store.clock
        self.recommendation_limit = recommendation_limit
        self._listeners: list[ProgressListener] = []
        self._daily_tip: FinancialTip | None = None
        self._daily_tip_date: date | None = None

    # Observers

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.store.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _commit(self) -> None:
        """Persist progress and course state best-effort, then notify."""
        self.store.persist()
        try:
            self.catalog.save_state()
        except PersistenceError as e:
            self.store.last_error = e
            logger.error("course_state_save_failed", error=str(e))
        self._notify()

    @property
    def last_error(self) -> PersistenceError | None:
        return self.store.last_error

    def retry_save(self) -> bool:
        ok = self.store.persist()
        if ok:
            try:
                self.catalog.save_state()
            except PersistenceError as e:
                self.store.last_error = e
                return False
        return ok

    # Lifecycle

    def load(self) -> UserProgress:
        progress = self.store.load()
        self.catalog.load_state()
        return progress

    def reset_all_data(self) -> UserProgress:
        progress = self.store.reset()
        self.catalog.reset_state()
        self._daily_tip = None
        self._daily_tip_date = None
        self._notify()
        return progress

    # Collaborator contract

    def progress(self) -> UserProgress:
        return self.store.snapshot()

    def on_course_selected(self, course_id: str) -> Course:
        course = self.catalog.require_course(course_id)
        self.store.set_current_course(course_id)
        self.tracker.track_user_action(
            "course_selected", {"course_id": course_id, "title": course.title}
        )
        self._commit()
        return course

    def start_lesson(self, course_id: str, lesson_id: str) -> LessonSession:
        """Start a lesson attempt whose completion is reported back here."""
        lesson = self.catalog.require_lesson(course_id, lesson_id)
        session = LessonSession(
            lesson,
            course_id,
            on_complete=self._on_session_complete,
            tracker=self.tracker,
        )
        session.start()
        self.tracker.track_lesson_start(lesson_id, course_id)
        return session

    def _on_session_complete(self, result: LessonResult) -> None:
        self.on_lesson_completed(
            result.lesson_id, result.course_id, result.time_spent_minutes, result.score
        )

    def on_lesson_completed(
        self,
        lesson_id: str,
        course_id: str,
        time_spent_minutes: int,
        score: float,
    ) -> UserProgress:
        """Apply a finished lesson: XP, streak, log entry, course completion.

        Raises:
            ValidationError: Negative time, a score outside 0-100, or an
                unknown course or lesson.
        """
        if time_spent_minutes < 0:
            raise ValidationError(f"Time spent must be non-negative, got {time_spent_minutes}")
        if not 0.0 <= score <= 100.0:
            raise ValidationError(f"Score must be between 0 and 100, got {score}")
        course = self.catalog.require_course(course_id)
        self.catalog.require_lesson(course_id, lesson_id)

        with self.store.transaction():
            self.store.record_lesson(
                lesson_id,
                course_id,
                time_spent_minutes,
                score,
                category=course.category,
                difficulty=course.difficulty,
            )
            if self.catalog.mark_lesson_completed(course_id, lesson_id):
                self.store.complete_course(course_id)

        self.tracker.track_lesson_completion(lesson_id, course_id, time_spent_minutes, score)
        self._commit()
        return self.store.snapshot()

    def get_recommendations(self, limit: int | None = None) -> list[Recommendation]:
        return self.recommender.recommend(
            self.store.snapshot(), limit=limit if limit is not None else self.recommendation_limit
        )

    def get_daily_tip(self) -> FinancialTip | None:
        """Tip of the day; a new one is drawn once per calendar day."""
        today = self.clock.today()
        if self._daily_tip is None or self._daily_tip_date != today:
            return self.refresh_daily_tip()
        return self._daily_tip

    def refresh_daily_tip(self) -> FinancialTip | None:
        self._daily_tip = self.recommender.select_daily_tip()
        self._daily_tip_date = self.clock.today()
        return self._daily_tip

    def get_challenges(self) -> list[LearningChallenge]:
        return self.recommender.challenge_progress(self.store.snapshot())

    def export_progress_report(self) -> str:
        return export_progress_report(self.store.snapshot(), self.clock.today())

    # Simulated network

    async def download_course(self, course_id: str) -> Course:
        course = await self.network.download_course(course_id)
        self.tracker.track_user_action("course_downloaded", {"course_id": course_id})
        self._commit()
        return course

    async def sync(self) -> None:
        await self.network.sync_with_server()


def build_service(settings: Settings, clock: Clock | None = None) -> LearningService:
    """Construct and load every component from settings."""
    clock = clock or SystemClock()
    backend = JsonFileStore(settings.storage_dir)
    catalog = ContentCatalog(SAMPLE_COURSES, backend=backend)
    store = ProgressStore(backend, clock=clock, default_daily_goal=settings.default_daily_goal)
    service = LearningService(
        store=store,
        catalog=catalog,
        recommender=RecommendationEngine(catalog),
        analytics=AnalyticsAggregator(catalog, clock=clock),
        network=SimulatedNetwork(
            catalog,
            sync_latency=settings.sync_latency_seconds,
            download_latency=settings.download_latency_seconds,
            timeout=settings.network_timeout_seconds,
        ),
        clock=clock,
        recommendation_limit=settings.recommendation_limit,
    )
    service.load()
    logger.info("service_ready", storage_dir=str(settings.storage_dir))
    return service
