"""REST API routes exposing the learning service."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from edufortune.analysis.report import improvement_suggestions, motivational_message
from edufortune.errors import NetworkError, UnknownCourseError, UnknownLessonError, ValidationError
from edufortune.models.analytics import TimeRange
from edufortune.models.course import CourseCategory, DifficultyLevel
from edufortune.service import LearningService

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class LessonCompletion(BaseModel):
    lesson_id: str
    course_id: str
    time_spent_minutes: int = Field(ge=0)
    score: float = Field(ge=0.0, le=100.0)


def get_service(request: Request) -> LearningService:
    return request.app.state.service


def _not_found(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/progress")
async def get_progress(service: LearningService = Depends(get_service)) -> dict:
    progress = service.progress()
    data = progress.model_dump(mode="json", exclude={"activity_log"})
    data["level_title"] = progress.level.title
    data["experience_to_next_level"] = progress.experience_to_next_level
    data["experience_progress"] = progress.experience_progress
    data["save_error"] = str(service.last_error) if service.last_error else None
    return data


@router.get("/courses")
async def list_courses(
    q: str = "",
    category: CourseCategory | None = None,
    difficulty: DifficultyLevel | None = None,
    service: LearningService = Depends(get_service),
) -> list[dict]:
    courses = service.catalog.search(q)
    if category is not None:
        courses = [c for c in courses if c.category == category]
    if difficulty is not None:
        courses = [c for c in courses if c.difficulty == difficulty]
    return [
        {**c.model_dump(mode="json"), "progress": service.catalog.course_progress(c.id)}
        for c in courses
    ]


@router.post("/courses/{course_id}/select")
async def select_course(course_id: str, service: LearningService = Depends(get_service)) -> dict:
    try:
        course = service.on_course_selected(course_id)
    except UnknownCourseError as e:
        raise _not_found(e)
    return {"current_course": course.id}


@router.post("/courses/{course_id}/download")
async def download_course(
    course_id: str, service: LearningService = Depends(get_service)
) -> dict:
    try:
        course = await service.download_course(course_id)
    except UnknownCourseError as e:
        raise _not_found(e)
    except NetworkError as e:
        raise HTTPException(status_code=504, detail=str(e))
    return {"course_id": course.id, "is_unlocked": course.is_unlocked}


@router.post("/lessons/complete")
async def complete_lesson(
    body: LessonCompletion, service: LearningService = Depends(get_service)
) -> dict:
    try:
        progress = service.on_lesson_completed(
            body.lesson_id, body.course_id, body.time_spent_minutes, body.score
        )
    except (UnknownCourseError, UnknownLessonError) as e:
        raise _not_found(e)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return progress.model_dump(mode="json", exclude={"activity_log"})


@router.get("/recommendations")
async def get_recommendations(
    limit: int | None = Query(default=None, ge=0),
    service: LearningService = Depends(get_service),
) -> list[dict]:
    return [r.model_dump(mode="json") for r in service.get_recommendations(limit)]


@router.get("/tip")
async def get_daily_tip(service: LearningService = Depends(get_service)) -> dict | None:
    tip = service.get_daily_tip()
    return tip.model_dump(mode="json") if tip else None


@router.post("/tip/refresh")
async def refresh_daily_tip(service: LearningService = Depends(get_service)) -> dict | None:
    tip = service.refresh_daily_tip()
    return tip.model_dump(mode="json") if tip else None


@router.get("/challenges")
async def get_challenges(service: LearningService = Depends(get_service)) -> list[dict]:
    return [c.model_dump(mode="json") for c in service.get_challenges()]


@router.get("/analytics")
async def get_analytics(
    time_range: TimeRange = TimeRange.WEEK,
    service: LearningService = Depends(get_service),
) -> dict:
    progress = service.progress()
    analytics = service.analytics
    metrics = analytics.performance_metrics(progress)
    series = analytics.study_time_series(progress, time_range)
    return {
        "learning": analytics.learning_analytics(progress).model_dump(mode="json"),
        "performance": metrics.model_dump(mode="json"),
        "study_time": [p.model_dump(mode="json") for p in series],
        "daily_goal_progress": analytics.daily_goal_progress(progress),
        "weekly_goal_progress": analytics.weekly_goal_progress(progress),
        "completion_rate": analytics.completion_rate(progress),
        "motivation": motivational_message(progress),
        "suggestions": improvement_suggestions(
            progress, metrics, analytics.today_study_time(progress)
        ),
    }


@router.get("/reports/weekly")
async def get_weekly_report(service: LearningService = Depends(get_service)) -> dict:
    return service.analytics.weekly_report(service.progress()).model_dump(mode="json")


@router.get("/reports/monthly")
async def get_monthly_report(service: LearningService = Depends(get_service)) -> dict:
    return service.analytics.monthly_report(service.progress()).model_dump(mode="json")


@router.get("/reports/export", response_class=PlainTextResponse)
async def export_report(service: LearningService = Depends(get_service)) -> str:
    return service.export_progress_report()


@router.post("/sync")
async def sync(service: LearningService = Depends(get_service)) -> dict:
    try:
        await service.sync()
    except NetworkError as e:
        raise HTTPException(status_code=504, detail=str(e))
    return {"status": "synced"}
