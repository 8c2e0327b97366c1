"""Simple Event Bus / Observer implementation for plan lifecycle events.

Event names used so far:
  plan.created   -> payload {"plan": Plan}
  plan.stopped   -> payload {"plan": Plan, "day": int}
  plan.completed -> payload {"plan": Plan, "day": int}
  plan.restarted -> payload {"plan": Plan, "day": int, "reactivated": bool}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_CREATED = "plan.created"
PLAN_STOPPED = "plan.stopped"
PLAN_COMPLETED = "plan.completed"
PLAN_RESTARTED = "plan.restarted"


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
		# Subscriber failures are logged, never raised to the publisher.
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus (sugar function)."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'create_event',
	'PLAN_CREATED', 'PLAN_STOPPED', 'PLAN_COMPLETED', 'PLAN_RESTARTED'
]
