"""Structural checks and predicates over plans, progress and user records.

All helpers here are pure: they either answer a question or raise one of the
errors from ``physio.domain.errors``.
"""
from __future__ import annotations
from typing import Optional
from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.User import UserRecord
from physio.domain.errors import MalformedPlanError, ProgressStateError

__all__ = [
    "validate_plan", "has_active_program", "is_program_complete", "check_progress", "check_program",
    "percent_complete", "week_for_sessions",
]


def validate_plan(plan: ExercisePlan) -> ExercisePlan:
    """Reject plans whose week structure cannot back a progress tracker.

    A valid plan has duration_weeks >= 1 and exactly one weekly block per week,
    numbered 1..duration_weeks in order.
    """
    if plan is None:
        raise MalformedPlanError("No plan supplied")
    duration = plan.duration_weeks
    if not isinstance(duration, int) or isinstance(duration, bool) or duration < 1:
        raise MalformedPlanError(f"Plan duration must be at least one week, got {duration!r}")
    if len(plan.weekly_plans) != duration:
        raise MalformedPlanError(
            f"Plan declares {duration} weeks but contains {len(plan.weekly_plans)} weekly plans")
    for position, weekly in enumerate(plan.weekly_plans, start=1):
        if weekly.week != position:
            raise MalformedPlanError(
                f"Weekly plan at position {position} is numbered {weekly.week!r}")
    return plan


def has_active_program(user: Optional[UserRecord]) -> bool:
    return user is not None and user.active_plan is not None and user.progress_data is not None


def is_program_complete(progress: Optional[ProgramProgress]) -> bool:
    if progress is None:
        return False
    return progress.completed_sessions >= progress.total_weeks * progress.sessions_per_week


def percent_complete(completed_sessions: int, total_sessions: int) -> int:
    """Whole-number percentage, rounding halves up (12.5 -> 13)."""
    if total_sessions <= 0:
        return 0
    return (200 * completed_sessions + total_sessions) // (2 * total_sessions)


def week_for_sessions(completed_sessions: int, sessions_per_week: int, total_weeks: int) -> int:
    """1-based week the patient is in after completed_sessions, capped at the last week."""
    return min(total_weeks, completed_sessions // sessions_per_week + 1)


def check_progress(progress: ProgramProgress) -> ProgramProgress:
    """Verify the derived fields of progress agree with each other."""
    spw = progress.sessions_per_week
    if spw < 1:
        raise ProgressStateError(f"sessionsPerWeek must be at least 1, got {spw}")
    if progress.total_weeks < 1:
        raise ProgressStateError(f"totalWeeks must be at least 1, got {progress.total_weeks}")
    if len(progress.weekly_completions) != progress.total_weeks:
        raise ProgressStateError(
            f"weeklyCompletions has {len(progress.weekly_completions)} entries for "
            f"{progress.total_weeks} weeks")
    if any(n < 0 or n > spw for n in progress.weekly_completions):
        raise ProgressStateError(f"weeklyCompletions out of range 0..{spw}: {progress.weekly_completions}")
    if not 0 <= progress.completed_sessions <= progress.total_sessions:
        raise ProgressStateError(f"completedSessions out of range: {progress.completed_sessions}")
    if sum(progress.weekly_completions) != progress.completed_sessions:
        raise ProgressStateError(
            f"weeklyCompletions sum {sum(progress.weekly_completions)} != "
            f"completedSessions {progress.completed_sessions}")
    if progress.progress_percent != percent_complete(progress.completed_sessions, progress.total_sessions):
        raise ProgressStateError(f"progressPercent {progress.progress_percent} does not match session count")
    if progress.current_week != week_for_sessions(progress.completed_sessions, spw, progress.total_weeks):
        raise ProgressStateError(f"currentWeek {progress.current_week} does not match session count")
    return progress


def check_program(plan: ExercisePlan, progress: ProgramProgress) -> ProgramProgress:
    """Verify stored progress belongs to plan and is internally consistent."""
    if progress.total_weeks != plan.duration_weeks:
        raise ProgressStateError(
            f"Progress tracks {progress.total_weeks} weeks but plan '{plan.plan_title}' "
            f"lasts {plan.duration_weeks}")
    return check_progress(progress)
