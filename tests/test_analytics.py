"""Tests for AnalyticsAggregator and progress reports."""

from datetime import date, datetime, timedelta

import pytest

from edufortune.analysis.analytics import AnalyticsAggregator, activity_runs
from edufortune.analysis.report import (
    export_progress_report,
    format_minutes,
    improvement_suggestions,
    motivational_message,
)
from edufortune.clock import FixedClock
from edufortune.content.catalog import ContentCatalog
from edufortune.content.samples import SAMPLE_COURSES
from edufortune.models.analytics import ConsistencyRating, StudyFrequency, TimeRange
from edufortune.models.course import CourseCategory, DifficultyLevel
from edufortune.models.progress import (
    Achievement,
    AchievementCategory,
    ActivityRecord,
    UserLevel,
    UserProgress,
)

NOW = datetime(2026, 3, 20, 18, 0, 0)  # a Friday


def record(days_ago: int, score: float, minutes: int = 10, **kwargs) -> ActivityRecord:
    defaults = dict(
        lesson_id="banking-basics",
        course_id="financial-english-basics",
        category=CourseCategory.FINANCIAL,
        difficulty=DifficultyLevel.BEGINNER,
    )
    defaults.update(kwargs)
    return ActivityRecord(
        timestamp=NOW - timedelta(days=days_ago),
        time_spent_minutes=minutes,
        score=score,
        **defaults,
    )


@pytest.fixture
def aggregator():
    return AnalyticsAggregator(ContentCatalog(SAMPLE_COURSES), clock=FixedClock(NOW))


@pytest.mark.parametrize(
    "streak, frequency",
    [(0, StudyFrequency.RARE), (3, StudyFrequency.OCCASIONAL), (7, StudyFrequency.MODERATE),
     (14, StudyFrequency.FREQUENT), (30, StudyFrequency.DAILY)],
)
def test_study_frequency(aggregator, streak, frequency):
    assert aggregator.study_frequency(UserProgress(current_streak=streak)) == frequency


@pytest.mark.parametrize(
    "streak, rating",
    [(6, ConsistencyRating.NEEDS_IMPROVEMENT), (7, ConsistencyRating.FAIR),
     (13, ConsistencyRating.FAIR), (14, ConsistencyRating.GOOD), (29, ConsistencyRating.GOOD),
     (30, ConsistencyRating.EXCELLENT)],
)
def test_consistency_rating(streak, rating):
    assert ConsistencyRating.from_streak(streak) == rating


def test_consistency_score_and_velocity(aggregator):
    progress = UserProgress(current_streak=4, longest_streak=4, total_lessons_completed=12)
    assert aggregator.consistency_score(progress) == 40.0
    assert aggregator.learning_velocity(progress) == 3.0
    assert aggregator.consistency_score(UserProgress(current_streak=15)) == 100.0
    assert aggregator.learning_velocity(UserProgress(total_lessons_completed=5)) == 5.0


def test_learning_analytics_from_log(aggregator):
    log = [record(0, 100.0), record(1, 50.0), record(2, 90.0)]
    progress = UserProgress(
        total_lessons_completed=3, total_time_spent=30, current_streak=3, activity_log=log
    )
    analytics = aggregator.learning_analytics(progress)
    assert analytics.average_session_length == 10.0
    assert analytics.retention_rate == pytest.approx(80.0)
    assert analytics.preferred_study_times == [18]
    assert analytics.study_frequency == StudyFrequency.OCCASIONAL
    assert set(analytics.most_productive_days) == {"Friday", "Thursday", "Wednesday"}


def test_analytics_are_deterministic(aggregator):
    progress = UserProgress(activity_log=[record(i, 60.0 + i) for i in range(10)])
    assert aggregator.performance_metrics(progress) == aggregator.performance_metrics(progress)


def test_category_performance(aggregator):
    log = [
        record(0, 90.0, minutes=15),
        record(1, 80.0, minutes=20),
        record(2, 40.0, lesson_id="verb-tenses", course_id="grammar-fundamentals",
               category=CourseCategory.GRAMMAR),
    ]
    progress = UserProgress(activity_log=log, completed_courses=["financial-english-basics"])
    perf = {p.category: p for p in aggregator.category_performance(progress)}
    assert perf[CourseCategory.FINANCIAL].accuracy == pytest.approx(85.0)
    assert perf[CourseCategory.FINANCIAL].time_spent == 35
    assert perf[CourseCategory.FINANCIAL].courses_completed == 1
    assert perf[CourseCategory.GRAMMAR].accuracy == 40.0
    assert perf[CourseCategory.BUSINESS].attempts == 0


def test_improvement_and_strong_areas(aggregator):
    log = [
        record(0, 95.0),
        record(0, 40.0, category=CourseCategory.GRAMMAR),
        record(0, 70.0, category=CourseCategory.VOCABULARY),
    ]
    metrics = aggregator.performance_metrics(UserProgress(activity_log=log))
    assert metrics.improvement_areas == [
        "Grammar (accuracy: 40%)",
        "Vocabulary (accuracy: 70%)",
    ]
    assert metrics.strong_areas == ["Financial Literacy (accuracy: 95%)"]


def test_difficulty_progression(aggregator):
    log = [record(0, 100.0), record(1, 50.0), record(2, 80.0, lesson_id="credit-and-debt")]
    metrics = {m.difficulty: m for m in aggregator.difficulty_progression(UserProgress(activity_log=log))}
    beginner = metrics[DifficultyLevel.BEGINNER]
    assert beginner.success_rate == pytest.approx(200 / 3)
    assert beginner.average_attempts == pytest.approx(1.5)
    assert metrics[DifficultyLevel.ADVANCED].success_rate == 0.0


def test_streak_analysis_from_activity_dates(aggregator):
    # Runs: days 10-8 (3), days 5-4 (2), day 0 (1)
    log = [record(d, 80.0) for d in (10, 9, 8, 5, 4, 0)]
    progress = UserProgress(current_streak=1, longest_streak=3, activity_log=log)
    analysis = aggregator.streak_analysis(progress)
    assert analysis.average_streak_length == pytest.approx(2.0)
    assert analysis.streak_breaks == 2
    assert analysis.consistency_rating == ConsistencyRating.NEEDS_IMPROVEMENT


def test_activity_runs_counts_each_day_once():
    assert activity_runs([record(0, 50.0), record(0, 60.0), record(1, 70.0)]) == [2]
    assert activity_runs([]) == []


def test_learning_curve(aggregator):
    log = [record(40, 100.0), record(3, 100.0), record(0, 100.0)]
    curve = aggregator.learning_curve(UserProgress(activity_log=log))
    assert len(curve) == 30
    assert curve[-1].date == NOW.date()
    assert curve[0].cumulative_lessons == 1
    assert curve[-1].cumulative_lessons == 3
    assert curve[-1].skill_level == 7.5


def test_course_time_metrics(aggregator):
    log = [record(0, 90.0, minutes=30), record(1, 90.0, minutes=15), record(0, 90.0, course_id="gone")]
    metrics = aggregator.course_time_metrics(UserProgress(activity_log=log))
    assert len(metrics) == 1
    assert metrics[0].actual_time == 45
    assert metrics[0].efficiency == pytest.approx(1.0)


def test_study_time_series(aggregator):
    log = [record(0, 90.0, minutes=20), record(0, 90.0, minutes=5), record(6, 90.0, minutes=7)]
    series = aggregator.study_time_series(UserProgress(activity_log=log), TimeRange.WEEK)
    assert len(series) == 7
    assert series[-1].minutes == 25
    assert series[-1].lessons_completed == 2
    assert series[0].minutes == 7
    assert len(aggregator.study_time_series(UserProgress(), TimeRange.MONTH)) == 30


def test_goal_progress(aggregator):
    # NOW is a Friday; Monday is 4 days earlier
    log = [record(0, 90.0, minutes=15), record(4, 90.0, minutes=20), record(5, 90.0, minutes=99)]
    progress = UserProgress(daily_goal=15, weekly_goal=70, activity_log=log)
    assert aggregator.daily_goal_progress(progress) == 1.0
    assert aggregator.weekly_goal_progress(progress) == 0.5


def test_weekly_report(aggregator):
    log = [
        record(1, 80.0, minutes=30),
        record(2, 100.0, minutes=30, category=CourseCategory.GRAMMAR),
        record(9, 70.0, minutes=40),
    ]
    progress = UserProgress(current_streak=2, total_lessons_completed=3, activity_log=log)
    report = aggregator.weekly_report(progress)
    assert report.total_study_time == 60
    assert report.lessons_completed == 2
    assert report.average_accuracy == 90.0
    assert report.streak_maintained is False
    assert report.top_category == "Grammar"
    assert report.improvement_from_last_week == pytest.approx(50.0)


def test_weekly_report_empty(aggregator):
    report = aggregator.weekly_report(UserProgress())
    assert report.top_category == "N/A"
    assert report.improvement_from_last_week == 0.0


def test_monthly_report(aggregator):
    log = [record(1, 90.0, minutes=90), record(40, 70.0, minutes=30)]
    achievements = [
        Achievement(title="Level Up!", description="", icon="leaf.fill",
                    unlocked_date=NOW - timedelta(days=60), category=AchievementCategory.COMPLETION),
        Achievement(title="7 Day Streak", description="", icon="flame.fill",
                    unlocked_date=NOW - timedelta(days=2), category=AchievementCategory.STREAK),
    ]
    progress = UserProgress(current_streak=5, activity_log=log, achievements=achievements,
                            completed_courses=["a"])
    report = aggregator.monthly_report(progress)
    assert report.total_study_hours == 1.5
    assert report.skill_level_growth == pytest.approx(20.0)
    assert report.achievements_unlocked == 1
    assert report.top_achievement == "7 Day Streak"
    assert report.consistency_score == 50.0
    assert report.courses_completed == 1


def test_export_progress_report():
    progress = UserProgress(
        level=UserLevel.BEGINNER,
        experience=120,
        total_lessons_completed=12,
        total_time_spent=75,
        current_streak=2,
        longest_streak=5,
        achievements=[
            Achievement(title="Level Up!", description="Reached Beginner level", icon="leaf.fill",
                        unlocked_date=NOW, category=AchievementCategory.COMPLETION),
        ],
    )
    text = export_progress_report(progress, date(2026, 3, 20))
    assert text.startswith("EduFortune Progress Report\nGenerated: Mar 20, 2026\n")
    assert "- Level: Beginner\n" in text
    assert "- Experience: 120 XP\n" in text
    assert "- Total Study Time: 1h 15m\n" in text
    assert "Achievements (1):\n- Level Up!: Reached Beginner level\n" in text


def test_format_minutes():
    assert format_minutes(45) == "45m"
    assert format_minutes(60) == "1h 0m"


def test_motivational_message():
    assert "30-day streak" in motivational_message(UserProgress(current_streak=30))
    assert motivational_message(UserProgress()) == "You're off to a great start! Keep learning!"


def test_improvement_suggestions(aggregator):
    progress = UserProgress(activity_log=[record(0, 40.0, category=CourseCategory.GRAMMAR)])
    metrics = aggregator.performance_metrics(progress)
    suggestions = improvement_suggestions(progress, metrics, today_minutes=10)
    assert "Try to study daily to build a strong learning habit" in suggestions
    assert "Review previous lessons to improve understanding" in suggestions
    assert "Focus on improving: Grammar (accuracy: 40%)" in suggestions
