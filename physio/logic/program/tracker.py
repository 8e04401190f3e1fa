"""Session logging for the active plan.

``log_session`` is a pure function: it never mutates the progress it is given
and never touches storage. It answers with a ``SessionResult`` whose status is
one of:

    logged            progress was advanced by one session
    completed         this session finished the plan; the caller must append
                      ``history_item`` and clear the active plan and progress
    already_complete  nothing left to log; informational, not an error
    noop              plan or progress missing; input returned unchanged
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.PlanHistoryItem import PlanHistoryItem
from physio.domain.errors import ProgressStateError
from physio.logic.program.checks import percent_complete, week_for_sessions
from physio.logic.program.clock import now_iso
from physio.utilities.constants import STATUS_COMPLETED

SESSION_LOGGED = "logged"
PLAN_COMPLETED = "completed"
ALREADY_COMPLETE = "already_complete"
NOOP = "noop"

__all__ = ["SessionResult", "log_session", "SESSION_LOGGED", "PLAN_COMPLETED", "ALREADY_COMPLETE", "NOOP"]


class SessionResult:
    def __init__(self, status: str, progress: Optional[ProgramProgress] = None,
                 history_item: Optional[PlanHistoryItem] = None):
        self.status = status
        self.progress = progress
        self.history_item = history_item

    @property
    def changed(self) -> bool:
        return self.status in (SESSION_LOGGED, PLAN_COMPLETED)

    def __repr__(self) -> str:
        return f"SessionResult(status={self.status!r}, progress={self.progress!r})"


def log_session(progress: Optional[ProgramProgress], plan: Optional[ExercisePlan],
                now: Optional[datetime] = None) -> SessionResult:
    if progress is None or plan is None:
        return SessionResult(NOOP, progress)

    total_sessions = progress.total_weeks * progress.sessions_per_week
    if progress.completed_sessions >= total_sessions:
        return SessionResult(ALREADY_COMPLETE, progress)

    new_completed = progress.completed_sessions + 1
    if new_completed >= total_sessions:
        item = PlanHistoryItem(plan.plan_title, plan.duration_weeks, now_iso(now), STATUS_COMPLETED)
        return SessionResult(PLAN_COMPLETED, None, history_item=item)

    # Credit the week the patient was in before this session
    spw = progress.sessions_per_week
    weekly = list(progress.weekly_completions)
    week_index = progress.completed_sessions // spw
    if week_index >= len(weekly):
        raise ProgressStateError(
            f"Week index {week_index} is outside weeklyCompletions (length {len(weekly)})")
    sessions_in_prior_weeks = week_index * spw
    weekly[week_index] = progress.completed_sessions - sessions_in_prior_weeks + 1

    updated = ProgramProgress(
        progress_percent=percent_complete(new_completed, total_sessions),
        current_week=week_for_sessions(new_completed, spw, progress.total_weeks),
        completed_sessions=new_completed,
        total_weeks=progress.total_weeks,
        sessions_per_week=spw,
        weekly_completions=weekly,
    )
    return SessionResult(SESSION_LOGGED, updated)
