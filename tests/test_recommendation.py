"""Tests for course scoring, ranking, tips and challenges."""

import random

import pytest

from edufortune.content.catalog import ContentCatalog
from edufortune.content.samples import SAMPLE_COURSES
from edufortune.content.tips import TIP_POOL
from edufortune.models.course import Course, CourseCategory, DifficultyLevel
from edufortune.models.progress import UserLevel, UserPreferences, UserProgress
from edufortune.models.recommendation import Priority
from edufortune.recommendation.engine import RecommendationEngine, score_course


def course(**kwargs) -> Course:
    defaults = dict(
        id="c",
        title="Course",
        difficulty=DifficultyLevel.INTERMEDIATE,
        category=CourseCategory.VOCABULARY,
        estimated_duration=60,
    )
    defaults.update(kwargs)
    return Course(**defaults)


PREFS = UserPreferences(
    difficulty_preference=DifficultyLevel.BEGINNER,
    show_financial_tips=True,
    preferred_lesson_length=15,
)


class TestScoreCourse:
    def test_below_threshold_is_discarded(self):
        assert score_course(course(), UserLevel.NOVICE, 1, 0, PREFS) is None

    def test_exact_threshold_is_kept(self):
        rec = score_course(course(estimated_duration=20), UserLevel.NOVICE, 1, 0, PREFS)
        assert rec is not None
        assert rec.confidence == pytest.approx(0.6)
        assert rec.reason == "Fits your preferred lesson length"
        assert rec.priority == Priority.MEDIUM

    def test_cold_start_beginner_boost(self):
        rec = score_course(
            course(difficulty=DifficultyLevel.BEGINNER), UserLevel.NOVICE, 0, 0, PREFS
        )
        assert rec.priority == Priority.HIGH
        assert rec.confidence == pytest.approx(1.0)
        assert rec.reason == "Matches your preferred difficulty level • Perfect for getting started"

    def test_financial_course_high_priority(self):
        rec = score_course(
            course(category=CourseCategory.FINANCIAL), UserLevel.NOVICE, 1, 0, PREFS
        )
        assert rec.priority == Priority.HIGH
        assert rec.confidence == pytest.approx(0.7)

    def test_financial_without_tips_preference(self):
        prefs = PREFS.model_copy(update={"show_financial_tips": False})
        rec = score_course(course(category=CourseCategory.FINANCIAL), UserLevel.NOVICE, 1, 0, prefs)
        assert rec is None

    def test_streak_bonus(self):
        rec = score_course(course(), UserLevel.NOVICE, 1, 8, PREFS)
        assert rec.confidence == pytest.approx(0.65)
        assert "Keep your streak going!" in rec.reason

    def test_streak_of_exactly_seven_gets_no_bonus(self):
        assert score_course(course(), UserLevel.NOVICE, 1, 7, PREFS) is None

    def test_progressive_difficulty_uses_rank(self):
        prefs = PREFS.model_copy(update={"difficulty_preference": DifficultyLevel.INTERMEDIATE})
        harder = score_course(course(difficulty=DifficultyLevel.ADVANCED), UserLevel.NOVICE, 3, 0, prefs)
        easier = score_course(course(difficulty=DifficultyLevel.BEGINNER), UserLevel.NOVICE, 3, 0, prefs)
        assert harder is not None
        assert "Ready for the next challenge" in harder.reason
        assert easier is None

    def test_business_for_intermediate_learners(self):
        business = course(category=CourseCategory.BUSINESS)
        assert score_course(business, UserLevel.BEGINNER, 1, 0, PREFS) is None
        rec = score_course(business, UserLevel.INTERMEDIATE, 1, 0, PREFS)
        assert rec.confidence == pytest.approx(0.65)
        assert rec.reason == "Advance your professional skills"

    def test_confidence_capped_at_one(self):
        prefs = PREFS.model_copy(update={"preferred_lesson_length": 60})
        rec = score_course(
            course(difficulty=DifficultyLevel.BEGINNER, category=CourseCategory.FINANCIAL),
            UserLevel.NOVICE,
            0,
            10,
            prefs,
        )
        assert rec.confidence == 1.0

    def test_deterministic(self):
        args = (course(difficulty=DifficultyLevel.BEGINNER), UserLevel.NOVICE, 0, 3, PREFS)
        assert score_course(*args) == score_course(*args)


class TestRecommend:
    @pytest.fixture
    def engine(self):
        return RecommendationEngine(ContentCatalog(SAMPLE_COURSES), rng=random.Random(7))

    def test_new_learner_ranking(self, engine):
        recs = engine.recommend(UserProgress())
        ids = [r.course.id for r in recs]
        # Beginner financial course: 0.5 + 0.3 + 0.2 + 0.25 = 1.25, capped; high priority
        assert ids[0] == "financial-english-basics"
        assert all(r.confidence >= 0.6 for r in recs)
        priorities = [r.priority for r in recs]
        assert priorities == sorted(priorities, reverse=True)

    def test_ranking_priority_then_confidence(self, engine):
        recs = engine.recommend(UserProgress())
        for a, b in zip(recs, recs[1:]):
            assert (a.priority, a.confidence) >= (b.priority, b.confidence)

    def test_locked_courses_excluded(self):
        courses = [c.model_copy(update={"is_unlocked": False}) for c in SAMPLE_COURSES]
        engine = RecommendationEngine(ContentCatalog(courses))
        assert engine.recommend(UserProgress()) == []

    def test_limit(self, engine):
        assert len(engine.recommend(UserProgress(), limit=1)) == 1

    def test_same_input_same_output(self, engine):
        progress = UserProgress(current_streak=9)
        assert engine.recommend(progress) == engine.recommend(progress)


class TestDailyTip:
    def test_tip_from_pool(self):
        engine = RecommendationEngine(ContentCatalog(SAMPLE_COURSES), rng=random.Random(1))
        assert engine.select_daily_tip() in TIP_POOL

    def test_seeded_rng_is_reproducible(self):
        a = RecommendationEngine(ContentCatalog([]), rng=random.Random(42))
        b = RecommendationEngine(ContentCatalog([]), rng=random.Random(42))
        assert [a.select_daily_tip() for _ in range(5)] == [b.select_daily_tip() for _ in range(5)]

    def test_empty_pool(self):
        engine = RecommendationEngine(ContentCatalog([]), tips=[])
        assert engine.select_daily_tip() is None


class TestChallenges:
    def test_raw_ratio_not_clamped(self):
        engine = RecommendationEngine(ContentCatalog([]))
        progress = UserProgress(
            current_streak=14,
            longest_streak=14,
            total_lessons_completed=5,
            completed_courses=["a", "b", "c"],
        )
        streak, lessons, courses = engine.challenge_progress(progress)
        assert streak.progress == pytest.approx(2.0)
        assert streak.display_progress == 1.0
        assert streak.is_completed is True
        assert lessons.progress == pytest.approx(0.5)
        assert lessons.is_completed is False
        assert courses.is_completed is True


class TestLearnerInsights:
    def test_next_lesson_follows_overlay(self):
        catalog = ContentCatalog(SAMPLE_COURSES)
        engine = RecommendationEngine(catalog)
        progress = UserProgress(current_course="financial-english-basics")
        assert engine.next_lesson(progress).id == "banking-basics"
        catalog.mark_lesson_completed("financial-english-basics", "banking-basics")
        assert engine.next_lesson(progress).id == "credit-and-debt"

    def test_next_lesson_without_current_course(self):
        engine = RecommendationEngine(ContentCatalog(SAMPLE_COURSES))
        assert engine.next_lesson(UserProgress()) is None
        assert engine.next_lesson(UserProgress(current_course="gone")) is None

    def test_strength_areas_by_completed_courses(self):
        engine = RecommendationEngine(ContentCatalog([]))
        assert engine.strength_areas(UserProgress())[0] == "Motivation to learn"
        assert engine.strength_areas(UserProgress(completed_courses=["a"]))[0] == "Basic vocabulary"

    def test_weak_areas_from_activity_log(self):
        from datetime import datetime

        from edufortune.models.progress import ActivityRecord

        def rec(score, category):
            return ActivityRecord(
                timestamp=datetime(2026, 3, 2), lesson_id="l", course_id="c",
                time_spent_minutes=10, score=score, category=category,
            )

        engine = RecommendationEngine(ContentCatalog([]))
        progress = UserProgress(activity_log=[
            rec(60.0, CourseCategory.GRAMMAR),
            rec(90.0, CourseCategory.FINANCIAL),
            rec(75.0, CourseCategory.VOCABULARY),
        ])
        assert engine.weak_areas(progress) == [
            "Grammar (average score: 60%)",
            "Vocabulary (average score: 75%)",
        ]
