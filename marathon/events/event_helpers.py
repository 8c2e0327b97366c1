"""Event helper utilities.

This module provides helper functions for publishing plan lifecycle events
using the global event bus.

Quick import:
    from marathon.events.event_helpers import (
        publish_plan_created, publish_plan_stopped, publish_plan_completed,
        publish_plan_restarted,
    )
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import (
    create_event,
    PLAN_CREATED, PLAN_STOPPED, PLAN_COMPLETED, PLAN_RESTARTED,
)

__all__ = [
    'publish_plan_created', 'publish_plan_stopped', 'publish_plan_completed',
    'publish_plan_restarted',
]


def publish_plan_created(plan: Any):
    create_event(PLAN_CREATED, {'plan': plan})


def publish_plan_stopped(plan: Any, day: int):
    """Publish a plan.stopped event (a day was lost)."""
    create_event(PLAN_STOPPED, {'plan': plan, 'day': day})


def publish_plan_completed(plan: Any, day: int):
    """Publish a plan.completed event (the final day was won)."""
    create_event(PLAN_COMPLETED, {'plan': plan, 'day': day})


def publish_plan_restarted(plan: Any, day: int, reactivated: bool):
    """Publish a plan.restarted event.

    Payload structure:
        {'plan': Plan, 'day': <restart day>, 'reactivated': <stopped -> active>}
    """
    create_event(PLAN_RESTARTED, {'plan': plan, 'day': day, 'reactivated': reactivated})
