"""Event helper utilities.

This module provides helper functions for publishing program lifecycle events
using the global event bus.

Quick import:
    from physio.events.event_helpers import (
        publish_program_started, publish_session_logged,
        publish_program_completed, publish_program_replaced,
    )

"""
from __future__ import annotations
from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.PlanHistoryItem import PlanHistoryItem
from .Event_Bus import (
    publish_event,
    PROGRAM_STARTED, PROGRAM_SESSION_LOGGED, PROGRAM_COMPLETED, PROGRAM_REPLACED,
)

__all__ = [
    'publish_program_started', 'publish_session_logged',
    'publish_program_completed', 'publish_program_replaced',
]


def publish_program_started(user_id: str, plan: ExercisePlan, progress: ProgramProgress):
    """Publish a program.started event."""
    publish_event(PROGRAM_STARTED, {
        'user_id': user_id,
        'plan_title': plan.plan_title,
        'duration_weeks': plan.duration_weeks,
        'sessions_per_week': progress.sessions_per_week,
    })


def publish_session_logged(user_id: str, plan: ExercisePlan, progress: ProgramProgress):
    """Publish a program.session_logged event."""
    publish_event(PROGRAM_SESSION_LOGGED, {
        'user_id': user_id,
        'plan_title': plan.plan_title,
        'completed_sessions': progress.completed_sessions,
        'current_week': progress.current_week,
        'progress_percent': progress.progress_percent,
    })


def publish_program_completed(user_id: str, item: PlanHistoryItem):
    publish_event(PROGRAM_COMPLETED, {'user_id': user_id, 'history_item': item.to_dict()})


def publish_program_replaced(user_id: str, item: PlanHistoryItem):
    publish_event(PROGRAM_REPLACED, {'user_id': user_id, 'history_item': item.to_dict()})
