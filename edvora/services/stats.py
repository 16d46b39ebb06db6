import math
from datetime import date, datetime


def task_stats(tasks: list[dict]) -> dict:
    total = len(tasks)
    completed = sum(1 for task in tasks if task.get("status") == "completed" or task.get("completed"))
    pending = sum(1 for task in tasks if task.get("status") == "pending")
    return {
        "total_tasks": total,
        "completed_tasks": completed,
        "pending_tasks": pending,
        "completion_rate": math.floor(completed / total * 100 + 0.5) if total else 0,
    }


def _session_day(session: dict) -> date | None:
    completed_at = session.get("completed_at") or session.get("created_at")
    if isinstance(completed_at, datetime):
        return completed_at.date()
    return completed_at


def pomodoro_stats(sessions: list[dict], today: date) -> dict:
    todays = [session for session in sessions if _session_day(session) == today]
    return {
        "total_sessions": len(sessions),
        "total_minutes": sum(session.get("duration") or 0 for session in sessions),
        "today_sessions": len(todays),
        "today_minutes": sum(session.get("duration") or 0 for session in todays),
    }
