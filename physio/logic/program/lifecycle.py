"""Plan lifecycle transitions for a user's program slot.

    [no plan] --accept_plan--> [active, week 1, 0 sessions]
    [active]  --record_session (not last)--> [active, counters advanced]
    [active]  --record_session (last)--> [no plan] + history "Completed"
    [active]  --accept_plan--> history "Replaced", then [active, new plan]

Every function returns a new UserRecord; the one passed in is left as it was.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional, Tuple
from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.PlanHistoryItem import PlanHistoryItem
from physio.domain.User import UserRecord
from physio.domain.errors import MalformedPlanError
from physio.logic.program.checks import check_program, has_active_program, validate_plan
from physio.logic.program.clock import now_iso
from physio.logic.program.tracker import SessionResult, log_session, SESSION_LOGGED, PLAN_COMPLETED
from physio.utilities.constants import STATUS_COMPLETED, STATUS_REPLACED
from physio.utilities.config import DEFAULT_SESSIONS_PER_WEEK

__all__ = ["new_progress", "accept_plan", "complete_plan", "record_session"]


def new_progress(plan: ExercisePlan, sessions_per_week: int = DEFAULT_SESSIONS_PER_WEEK) -> ProgramProgress:
    return ProgramProgress(
        progress_percent=0,
        current_week=1,
        completed_sessions=0,
        total_weeks=plan.duration_weeks,
        sessions_per_week=sessions_per_week,
        weekly_completions=[0] * plan.duration_weeks,
    )


def accept_plan(user: UserRecord, new_plan: ExercisePlan,
                sessions_per_week: int = DEFAULT_SESSIONS_PER_WEEK,
                now: Optional[datetime] = None) -> UserRecord:
    """Make new_plan the active plan, archiving any current plan as Replaced."""
    validate_plan(new_plan)
    if sessions_per_week < 1:
        raise MalformedPlanError(f"sessions_per_week must be at least 1, got {sessions_per_week}")

    history = list(user.plan_history)
    if user.active_plan is not None:
        history.append(PlanHistoryItem(
            user.active_plan.plan_title,
            user.active_plan.duration_weeks,
            now_iso(now),
            STATUS_REPLACED,
        ))

    plan = ExercisePlan.from_dict(new_plan.to_dict())
    return user.replace(
        active_plan=plan,
        progress_data=new_progress(plan, sessions_per_week),
        plan_history=history,
    )


def complete_plan(user: UserRecord, history_item: PlanHistoryItem) -> UserRecord:
    """Archive the finished plan and clear the program slot."""
    if history_item.status != STATUS_COMPLETED:
        raise ValueError(f"complete_plan expects a '{STATUS_COMPLETED}' item, got '{history_item.status}'")
    return user.replace(
        active_plan=None,
        progress_data=None,
        plan_history=list(user.plan_history) + [history_item],
    )


def record_session(user: UserRecord, now: Optional[datetime] = None) -> Tuple[UserRecord, SessionResult]:
    """Log one session against the user's active plan and fold the outcome into the record.

    Stored progress that disagrees with its plan or with itself raises
    ProgressStateError before anything is logged.
    """
    if has_active_program(user):
        check_program(user.active_plan, user.progress_data)
    result = log_session(user.progress_data, user.active_plan, now=now)
    if result.status == SESSION_LOGGED:
        return user.replace(progress_data=result.progress), result
    if result.status == PLAN_COMPLETED:
        return complete_plan(user, result.history_item), result
    return user, result
