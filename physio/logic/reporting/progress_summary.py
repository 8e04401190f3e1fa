"""Dashboard view-model for a user's program slot.

Combines what the home screen, the tracker widget, the current-week card and
the profile history list need into one JSON-ready dictionary.
"""
from __future__ import annotations
from collections import Counter
from typing import Any, Dict, Optional
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.User import UserRecord
from physio.logic.program.checks import has_active_program, is_program_complete
from physio.utilities.constants import HISTORY_STATUSES

__all__ = ["remaining_sessions_in_week", "build_progress_summary"]

STATE_NO_PLAN = "no_plan"
STATE_ACTIVE = "active"
STATE_COMPLETE = "complete"


def remaining_sessions_in_week(progress: ProgramProgress) -> int:
    """Sessions still to do this week, as the tracker widget displays them.

    Right after a week boundary (count a positive multiple of sessions_per_week)
    the widget shows 0 rather than a full fresh week.
    """
    if is_program_complete(progress):
        return 0
    spw = progress.sessions_per_week
    remaining = spw - (progress.completed_sessions % spw)
    if remaining == spw and progress.completed_sessions > 0:
        return 0
    return remaining


def _history_block(user: UserRecord) -> Dict[str, Any]:
    counts = Counter(item.status for item in user.plan_history)
    return {
        "items": [item.to_dict() for item in reversed(user.plan_history)],
        "counts": {status: counts.get(status, 0) for status in HISTORY_STATUSES},
    }


def build_progress_summary(user: UserRecord) -> Dict[str, Any]:
    summary: Dict[str, Any] = {"user_id": user.id, "history": _history_block(user)}
    if not has_active_program(user):
        summary["state"] = STATE_NO_PLAN
        return summary

    plan = user.active_plan
    progress = user.progress_data
    summary["state"] = STATE_COMPLETE if is_program_complete(progress) else STATE_ACTIVE
    summary["plan_title"] = plan.plan_title
    summary["progress"] = {
        "progress_percent": progress.progress_percent,
        "current_week": progress.current_week,
        "total_weeks": progress.total_weeks,
        "week_label": f"Week {progress.current_week}/{progress.total_weeks}",
        "completed_sessions": progress.completed_sessions,
        "total_sessions": progress.total_sessions,
        "sessions_left_this_week": remaining_sessions_in_week(progress),
    }
    summary["chart"] = {
        "labels": [f"W{i + 1}" for i in range(progress.total_weeks)],
        "data": list(progress.weekly_completions),
        "target": progress.sessions_per_week,
    }
    weekly = plan.get_week(progress.current_week)
    current: Optional[Dict[str, Any]] = weekly.to_dict() if weekly else None
    summary["current_week_plan"] = current
    return summary
