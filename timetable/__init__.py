"""Weekly timetable grid layout: overlap clustering and pixel geometry."""

from .configs import load_configs, read_config_file, resolve_configs, validate_configs
from .engine import LayoutEngine, layout
from .exceptions import InvalidConfig, InvalidEvent, LayoutError, OutOfGridRange
from .geometry import to_rect
from .groups import ExpandedSchedule, expand_event_groups, fit_configs
from .models import (
    Configs,
    Event,
    EventGroup,
    LaidOutEvent,
    OverlapPair,
    OverlapReport,
    Rect,
    SectionTimes,
    SlotAssignment,
    TimeInterval,
)
from .overlap import detect_overlaps, overlaps, to_interval
from .positioner import assign_slots

__all__ = [
    "Configs",
    "Event",
    "EventGroup",
    "ExpandedSchedule",
    "InvalidConfig",
    "InvalidEvent",
    "LaidOutEvent",
    "LayoutEngine",
    "LayoutError",
    "OutOfGridRange",
    "OverlapPair",
    "OverlapReport",
    "Rect",
    "SectionTimes",
    "SlotAssignment",
    "TimeInterval",
    "assign_slots",
    "detect_overlaps",
    "expand_event_groups",
    "fit_configs",
    "layout",
    "load_configs",
    "overlaps",
    "read_config_file",
    "resolve_configs",
    "to_interval",
    "to_rect",
    "validate_configs",
]
