"""Service layer exports.

Qt-free; the grid model in :mod:`launcher_sync.gui` builds on
``EditBufferTracker``.
"""

from .edit_buffer import BufferState, EditBufferTracker  # noqa: F401
from .event_bus import EventBus, SessionEvent  # noqa: F401
from .renumbering import renumber  # noqa: F401
from .sort_dedup import SortDedupPlan, apply_plan, plan_sort_and_dedup  # noqa: F401
from .tab_config import TabConfigError, TabConfiguration  # noqa: F401

__all__ = [
    "BufferState",
    "EditBufferTracker",
    "EventBus",
    "SessionEvent",
    "renumber",
    "SortDedupPlan",
    "apply_plan",
    "plan_sort_and_dedup",
    "TabConfigError",
    "TabConfiguration",
]
