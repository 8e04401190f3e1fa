"""Web-facing observers for program events.

This module subscribes to the GLOBAL_EVENT_BUS for every program.* event and
stores a lightweight in-memory ring buffer of recent events that the web
layer can poll to show an activity feed without a full page reload.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; for multi-process deployment the feed stays
    per-process, which is fine for non-critical notifications.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock

from physio.logic.program.clock import now_iso
from physio.utilities.config import MAX_EVENTS
from .Event_Bus import GLOBAL_EVENT_BUS, PROGRAM_EVENTS

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': now_iso(),
        }
        if isinstance(payload, dict):
            for k in ('user_id', 'plan_title', 'duration_weeks', 'sessions_per_week',
                      'completed_sessions', 'current_week', 'progress_percent'):
                if k in payload:
                    evt[k] = payload[k]
            item = payload.get('history_item')
            if isinstance(item, dict):
                evt['plan_title'] = item.get('planTitle', '')
                evt['status'] = item.get('status', '')
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for event_name in PROGRAM_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(event_name, _record)
    _started = True
    logger.info("Web observers for program events started")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
