"""Human-readable progress summaries."""

from datetime import date

from edufortune.models.analytics import PerformanceMetrics
from edufortune.models.progress import UserLevel, UserProgress


def format_minutes(minutes: int) -> str:
    """Format a duration in minutes as `1h 5m` or `45m`."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def export_progress_report(progress: UserProgress, generated_on: date) -> str:
    """Plain-text report of overall statistics and unlocked achievements."""
    lines = [
        "EduFortune Progress Report",
        f"Generated: {generated_on.strftime('%b %d, %Y')}",
        "",
        "Overall Statistics:",
        f"- Level: {progress.level.title}",
        f"- Experience: {progress.experience} XP",
        f"- Lessons Completed: {progress.total_lessons_completed}",
        f"- Courses Completed: {len(progress.completed_courses)}",
        f"- Total Study Time: {format_minutes(progress.total_time_spent)}",
        f"- Current Streak: {progress.current_streak} days",
        f"- Longest Streak: {progress.longest_streak} days",
        "",
        f"Achievements ({len(progress.achievements)}):",
    ]
    lines.extend(f"- {a.title}: {a.description}" for a in progress.achievements)
    return "\n".join(lines) + "\n"


def motivational_message(progress: UserProgress) -> str:
    streak = progress.current_streak
    if streak >= 30:
        return f"Incredible! You're on fire with a {streak}-day streak!"
    elif streak >= 14:
        return "Amazing consistency! Keep up the great work!"
    elif streak >= 7:
        return "One week strong! You're building great habits!"
    elif progress.level >= UserLevel.ADVANCED:
        return "You're becoming an expert! Your dedication shows!"
    elif progress.total_lessons_completed >= 10:
        return "Great progress! You're really getting the hang of this!"
    else:
        return "You're off to a great start! Keep learning!"


def improvement_suggestions(
    progress: UserProgress,
    metrics: PerformanceMetrics,
    today_minutes: int,
) -> list[str]:
    suggestions = []
    if progress.current_streak < 7:
        suggestions.append("Try to study daily to build a strong learning habit")
    if metrics.overall_accuracy < 80:
        suggestions.append("Review previous lessons to improve understanding")
    if today_minutes < progress.daily_goal:
        suggestions.append("Spend a few more minutes today to reach your daily goal")
    suggestions.extend(f"Focus on improving: {area}" for area in metrics.improvement_areas[:2])
    return suggestions
