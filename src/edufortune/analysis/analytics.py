"""Deterministic learning analytics derived from the progress activity log."""

from collections import Counter, defaultdict
from datetime import date, timedelta

from edufortune.clock import Clock, SystemClock
from edufortune.content.catalog import ContentCatalog
from edufortune.models.analytics import (
    CategoryPerformance,
    ConsistencyRating,
    CourseTimeMetric,
    DifficultyMetric,
    LearningAnalytics,
    LearningPoint,
    MonthlyReport,
    PerformanceMetrics,
    StreakAnalysis,
    StudyDataPoint,
    StudyFrequency,
    TimeRange,
    WeeklyReport,
)
from edufortune.models.course import CourseCategory, DifficultyLevel
from edufortune.models.progress import ActivityRecord, UserProgress

PASSING_SCORE = 70.0
STRONG_ACCURACY = 85.0
WEAK_ACCURACY = 80.0
LEARNING_CURVE_DAYS = 30


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _records_between(
    records: list[ActivityRecord], start: date, end: date
) -> list[ActivityRecord]:
    """Records whose calendar day lies in [start, end]."""
    return [r for r in records if start <= r.timestamp.date() <= end]


def activity_runs(records: list[ActivityRecord]) -> list[int]:
    """Lengths of consecutive-day runs over the distinct activity dates."""
    days = sorted({r.timestamp.date() for r in records})
    runs: list[int] = []
    previous: date | None = None
    for day in days:
        if previous is not None and (day - previous).days == 1:
            runs[-1] += 1
        else:
            runs.append(1)
        previous = day
    return runs


class AnalyticsAggregator:
    """Read-only statistics over a progress snapshot.

    Every figure is computed from the aggregate's counters and its activity
    log; identical inputs always give identical outputs.

    Args:
        catalog: Used to resolve course titles, durations and categories.
        clock: Anchors "this week" and "this month" windows.
    """

    def __init__(self, catalog: ContentCatalog, clock: Clock | None = None):
        self.catalog = catalog
        self.clock = clock or SystemClock()

    def study_frequency(self, progress: UserProgress) -> StudyFrequency:
        return StudyFrequency.from_streak(progress.current_streak)

    def consistency_score(self, progress: UserProgress) -> float:
        return float(min(progress.current_streak * 10, 100))

    def learning_velocity(self, progress: UserProgress) -> float:
        return progress.total_lessons_completed / max(progress.current_streak, 1)

    def learning_analytics(self, progress: UserProgress) -> LearningAnalytics:
        log = progress.activity_log
        average_session = (
            progress.total_time_spent / max(progress.total_lessons_completed, 1)
            if progress.total_time_spent > 0
            else 0.0
        )
        hours = Counter(r.timestamp.hour for r in log)
        weekdays = Counter(r.timestamp.strftime("%A") for r in log)
        return LearningAnalytics(
            total_study_time=progress.total_time_spent,
            average_session_length=average_session,
            study_frequency=self.study_frequency(progress),
            preferred_study_times=sorted(h for h, _ in hours.most_common(3)),
            most_productive_days=[d for d, _ in weekdays.most_common(3)],
            learning_velocity=self.learning_velocity(progress),
            retention_rate=_mean([r.score for r in log]),
            consistency_score=self.consistency_score(progress),
        )

    def category_performance(self, progress: UserProgress) -> list[CategoryPerformance]:
        by_category: dict[CourseCategory, list[ActivityRecord]] = defaultdict(list)
        for record in progress.activity_log:
            if record.category is not None:
                by_category[record.category].append(record)

        completed_by_category: Counter[CourseCategory] = Counter()
        for course_id in progress.completed_courses:
            course = self.catalog.get_course(course_id)
            if course is not None:
                completed_by_category[course.category] += 1

        performance = []
        for category in CourseCategory:
            records = by_category.get(category, [])
            accuracy = _mean([r.score for r in records])
            performance.append(
                CategoryPerformance(
                    category=category,
                    accuracy=accuracy,
                    time_spent=sum(r.time_spent_minutes for r in records),
                    courses_completed=completed_by_category[category],
                    average_score=accuracy,
                    attempts=len(records),
                )
            )
        return performance

    def difficulty_progression(self, progress: UserProgress) -> list[DifficultyMetric]:
        metrics = []
        for difficulty in DifficultyLevel:
            records = [r for r in progress.activity_log if r.difficulty == difficulty]
            lessons = {r.lesson_id for r in records}
            passed = sum(1 for r in records if r.score >= PASSING_SCORE)
            metrics.append(
                DifficultyMetric(
                    difficulty=difficulty,
                    success_rate=100 * passed / len(records) if records else 0.0,
                    average_attempts=len(records) / len(lessons) if lessons else 0.0,
                    time_per_lesson=_mean([float(r.time_spent_minutes) for r in records]),
                )
            )
        return metrics

    def learning_curve(
        self, progress: UserProgress, days: int = LEARNING_CURVE_DAYS
    ) -> list[LearningPoint]:
        today = self.clock.today()
        start = today - timedelta(days=days - 1)
        log = progress.activity_log
        cumulative = sum(1 for r in log if r.timestamp.date() < start)
        scores_so_far = [r.score for r in log if r.timestamp.date() < start]
        points = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            todays = [r for r in log if r.timestamp.date() == day]
            cumulative += len(todays)
            scores_so_far.extend(r.score for r in todays)
            skill = min(100.0, cumulative * 2.5)
            points.append(
                LearningPoint(
                    date=day,
                    cumulative_lessons=cumulative,
                    skill_level=skill,
                    confidence=min(100.0, skill * 0.8 + 0.2 * _mean(scores_so_far)),
                )
            )
        return points

    def streak_analysis(self, progress: UserProgress) -> StreakAnalysis:
        runs = activity_runs(progress.activity_log)
        return StreakAnalysis(
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            average_streak_length=_mean([float(r) for r in runs]),
            streak_breaks=max(0, len(runs) - 1),
            consistency_rating=ConsistencyRating.from_streak(progress.current_streak),
        )

    def course_time_metrics(self, progress: UserProgress) -> list[CourseTimeMetric]:
        minutes: dict[str, int] = defaultdict(int)
        for record in progress.activity_log:
            minutes[record.course_id] += record.time_spent_minutes
        metrics = []
        for course_id, actual in minutes.items():
            course = self.catalog.get_course(course_id)
            if course is None:
                continue
            estimated = course.estimated_duration
            metrics.append(
                CourseTimeMetric(
                    course_id=course_id,
                    course_title=course.title,
                    estimated_time=estimated,
                    actual_time=actual,
                    efficiency=actual / estimated if estimated else 0.0,
                )
            )
        return metrics

    def performance_metrics(self, progress: UserProgress) -> PerformanceMetrics:
        categories = self.category_performance(progress)
        return PerformanceMetrics(
            overall_accuracy=_mean([r.score for r in progress.activity_log]),
            category_performance=categories,
            difficulty_progression=self.difficulty_progression(progress),
            learning_curve=self.learning_curve(progress),
            streak_analysis=self.streak_analysis(progress),
            time_to_completion=self.course_time_metrics(progress),
            improvement_areas=improvement_areas(categories),
            strong_areas=strong_areas(categories),
        )

    def study_time_series(
        self, progress: UserProgress, time_range: TimeRange = TimeRange.WEEK
    ) -> list[StudyDataPoint]:
        """One point per day, oldest first, ending today."""
        today = self.clock.today()
        minutes: Counter[date] = Counter()
        lessons: Counter[date] = Counter()
        for record in progress.activity_log:
            day = record.timestamp.date()
            minutes[day] += record.time_spent_minutes
            lessons[day] += 1
        start = today - timedelta(days=time_range.days - 1)
        return [
            StudyDataPoint(
                date=start + timedelta(days=i),
                minutes=minutes[start + timedelta(days=i)],
                lessons_completed=lessons[start + timedelta(days=i)],
            )
            for i in range(time_range.days)
        ]

    def today_study_time(self, progress: UserProgress) -> int:
        today = self.clock.today()
        return sum(
            r.time_spent_minutes for r in _records_between(progress.activity_log, today, today)
        )

    def week_study_time(self, progress: UserProgress) -> int:
        """Minutes studied since Monday of the current week."""
        today = self.clock.today()
        monday = today - timedelta(days=today.weekday())
        return sum(
            r.time_spent_minutes for r in _records_between(progress.activity_log, monday, today)
        )

    def daily_goal_progress(self, progress: UserProgress) -> float:
        return self.today_study_time(progress) / progress.daily_goal

    def weekly_goal_progress(self, progress: UserProgress) -> float:
        return self.week_study_time(progress) / progress.weekly_goal

    def completion_rate(self, progress: UserProgress) -> float:
        total = self.catalog.total_lessons()
        return progress.total_lessons_completed / total if total else 0.0

    def weekly_report(self, progress: UserProgress) -> WeeklyReport:
        today = self.clock.today()
        this_week = _records_between(progress.activity_log, today - timedelta(days=6), today)
        last_week = _records_between(
            progress.activity_log, today - timedelta(days=13), today - timedelta(days=7)
        )
        minutes = sum(r.time_spent_minutes for r in this_week)
        previous = sum(r.time_spent_minutes for r in last_week)
        if previous:
            improvement = 100 * (minutes - previous) / previous
        else:
            improvement = 100.0 if minutes else 0.0

        by_category: dict[CourseCategory, list[float]] = defaultdict(list)
        for record in this_week:
            if record.category is not None:
                by_category[record.category].append(record.score)
        top_category = "N/A"
        if by_category:
            top_category = max(by_category.items(), key=lambda item: _mean(item[1]))[0].value

        return WeeklyReport(
            week_of=today,
            total_study_time=minutes,
            lessons_completed=len(this_week),
            average_accuracy=_mean([r.score for r in this_week]),
            streak_maintained=progress.current_streak >= 7,
            top_category=top_category,
            improvement_from_last_week=improvement,
        )

    def monthly_report(self, progress: UserProgress) -> MonthlyReport:
        today = self.clock.today()
        month_start = today - timedelta(days=29)
        this_month = _records_between(progress.activity_log, month_start, today)
        last_month = _records_between(
            progress.activity_log, today - timedelta(days=59), today - timedelta(days=30)
        )
        growth = 0.0
        if this_month and last_month:
            growth = _mean([r.score for r in this_month]) - _mean([r.score for r in last_month])
        unlocked = [a for a in progress.achievements if a.unlocked_date.date() >= month_start]
        return MonthlyReport(
            month_of=today,
            total_study_hours=sum(r.time_spent_minutes for r in this_month) / 60.0,
            courses_completed=len(progress.completed_courses),
            skill_level_growth=growth,
            consistency_score=self.consistency_score(progress),
            achievements_unlocked=len(unlocked),
            top_achievement=(
                progress.achievements[-1].title if progress.achievements else "Getting Started"
            ),
        )


def improvement_areas(performance: list[CategoryPerformance]) -> list[str]:
    """Attempted categories below 80% accuracy, weakest first, at most three."""
    weak = sorted(
        (p for p in performance if p.attempts and p.accuracy < WEAK_ACCURACY),
        key=lambda p: p.accuracy,
    )
    return [f"{p.category.value} (accuracy: {int(p.accuracy)}%)" for p in weak[:3]]


def strong_areas(performance: list[CategoryPerformance]) -> list[str]:
    """Attempted categories at or above 85% accuracy, strongest first, at most three."""
    strong = sorted(
        (p for p in performance if p.attempts and p.accuracy >= STRONG_ACCURACY),
        key=lambda p: p.accuracy,
        reverse=True,
    )
    return [f"{p.category.value} (accuracy: {int(p.accuracy)}%)" for p in strong[:3]]
