"""Simple Event Bus / Observer implementation for program lifecycle notifications.

Event names used so far:
  program.started        -> payload {"user_id": str, "plan_title": str, "duration_weeks": int, "sessions_per_week": int}
  program.session_logged -> payload {"user_id": str, "plan_title": str, "completed_sessions": int, "current_week": int, "progress_percent": int}
  program.completed      -> payload {"user_id": str, "history_item": dict}
  program.replaced       -> payload {"user_id": str, "history_item": dict}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PROGRAM_STARTED = "program.started"
PROGRAM_SESSION_LOGGED = "program.session_logged"
PROGRAM_COMPLETED = "program.completed"
PROGRAM_REPLACED = "program.replaced"
PROGRAM_EVENTS = (PROGRAM_STARTED, PROGRAM_SESSION_LOGGED, PROGRAM_COMPLETED, PROGRAM_REPLACED)


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		# A failing subscriber must not undo a write that already reached the store
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception(f"[EventBus] Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def publish_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish_event',
	'PROGRAM_STARTED', 'PROGRAM_SESSION_LOGGED', 'PROGRAM_COMPLETED', 'PROGRAM_REPLACED', 'PROGRAM_EVENTS'
]
