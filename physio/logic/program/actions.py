"""Adapter between UI/API requests and the pure program logic.

Each action reads the user from the store, applies a lifecycle transition,
writes the returned copy back and publishes the matching program event. The
read-modify-write runs inside ``UserRepository.transaction`` so requests for
the same user are applied one after another.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional, Tuple

from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.User import UserRecord
from physio.domain.errors import ConcurrentUpdateError, UserNotFoundError
from physio.events.event_helpers import (
    publish_program_started, publish_session_logged,
    publish_program_completed, publish_program_replaced,
)
from physio.infra.User_Repository import UserRepository
from physio.logic.program.lifecycle import accept_plan, record_session
from physio.logic.program.tracker import SessionResult, SESSION_LOGGED, PLAN_COMPLETED
from physio.utilities.config import DEFAULT_SESSIONS_PER_WEEK

logger = logging.getLogger(__name__)

__all__ = ["accept_plan_for_user", "log_session_for_user"]


def _require_user(repo: UserRepository, user_id: str) -> UserRecord:
    user = repo.get(user_id)
    if user is None:
        raise UserNotFoundError(f"User '{user_id}' not found")
    return user


def accept_plan_for_user(repo: UserRepository, user_id: str, plan: ExercisePlan,
                         sessions_per_week: Optional[int] = None,
                         now: Optional[datetime] = None) -> UserRecord:
    spw = sessions_per_week if sessions_per_week is not None else DEFAULT_SESSIONS_PER_WEEK
    with repo.transaction(user_id):
        user = _require_user(repo, user_id)
        updated = accept_plan(user, plan, sessions_per_week=spw, now=now)
        repo.put(updated)

    if len(updated.plan_history) > len(user.plan_history):
        replaced = updated.plan_history[-1]
        logger.info(f"User {user_id} replaced plan '{replaced.plan_title}'")
        publish_program_replaced(user_id, replaced)
    logger.info(f"User {user_id} accepted plan '{plan.plan_title}' ({plan.duration_weeks} weeks, {spw}/week)")
    publish_program_started(user_id, updated.active_plan, updated.progress_data)
    return updated


def log_session_for_user(repo: UserRepository, user_id: str,
                         expected_completed_sessions: Optional[int] = None,
                         now: Optional[datetime] = None) -> Tuple[UserRecord, SessionResult]:
    """Log one session; expected_completed_sessions guards against duplicate submissions."""
    with repo.transaction(user_id):
        user = _require_user(repo, user_id)
        progress = user.progress_data
        if (expected_completed_sessions is not None and progress is not None
                and progress.completed_sessions != expected_completed_sessions):
            raise ConcurrentUpdateError(
                f"Expected {expected_completed_sessions} completed sessions, "
                f"store has {progress.completed_sessions}")
        updated, result = record_session(user, now=now)
        if result.changed:
            repo.put(updated)

    if result.status == SESSION_LOGGED:
        publish_session_logged(user_id, updated.active_plan, updated.progress_data)
    elif result.status == PLAN_COMPLETED:
        logger.info(f"User {user_id} completed plan '{result.history_item.plan_title}'")
        publish_program_completed(user_id, result.history_item)
    return updated, result
