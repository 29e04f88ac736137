"""
Lifecycle hooks registry for PostKeep records.
"""

from .dispatcher import EVENTS, HookDispatcher, hooks

__all__ = ["EVENTS", "HookDispatcher", "hooks"]
