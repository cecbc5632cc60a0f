"""Data models for loaded schedules."""

from dataclasses import dataclass, field
from typing import Optional

from timetable.models import Configs, Event


@dataclass
class Schedule:
    """Events read from a source, with the grid configs to lay them out on."""
    
    events: list[Event]
    configs: Configs
    earliest_grid: Optional[int] = field(default=None)  # hour row to scroll to
