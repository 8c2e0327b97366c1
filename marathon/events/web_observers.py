"""Web-facing observers for plan lifecycle events.

This module subscribes to the GLOBAL_EVENT_BUS for every plan.* event and
stores a lightweight in-memory ring buffer of recent events that the web
layer can poll (GET /api/events?since=<cursor>).

Each event is stored with an auto-increment integer id (cursor) so clients
can ask only for newer events. A Lock guards the buffer; the buffer is per
process. MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_CREATED, PLAN_STOPPED, PLAN_COMPLETED, PLAN_RESTARTED
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            plan = payload.get('plan')
            if plan is not None:
                evt['plan_id'] = getattr(plan, 'id', None)
                evt['user_id'] = getattr(plan, 'user_id', None)
                evt['name'] = getattr(plan, 'name', '')
                evt['status'] = getattr(plan, 'status', '')
            for k in ('day', 'reactivated'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (PLAN_CREATED, PLAN_STOPPED, PLAN_COMPLETED, PLAN_RESTARTED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: Optional[int] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally only one user's.

    Response includes next_cursor (largest id) so a client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if user_id is not None:
        data = [e for e in data if e.get('user_id') == user_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
