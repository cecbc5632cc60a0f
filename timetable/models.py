"""Data models for timetable events and grid layout."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Event:
    """A single schedule entry placed on the weekly grid.

    Only ``day``, ``start_time`` and ``end_time`` matter for layout; the
    remaining fields are display metadata carried through untouched.
    """

    course_id: str
    day: int  # 1-7: Monday-Sunday
    start_time: str  # "HH:MM", 24-hour
    end_time: str
    title: str = field(default="")
    location: str = field(default="")
    section: str = field(default="")
    color: Optional[str] = field(default=None)
    background: Optional[str] = field(default=None)
    group_index: Optional[int] = field(default=None)

    @property
    def label(self) -> str:
        """Course id followed by the section, as shown on an event card."""
        if self.section:
            return f"{self.course_id} {self.section}"
        return self.course_id


@dataclass(frozen=True)
class TimeInterval:
    """Day and minutes-of-day range derived from an event."""

    day: int
    start_minute: int
    end_minute: int

    @property
    def duration(self) -> int:
        return self.end_minute - self.start_minute


@dataclass(frozen=True)
class OverlapPair:
    """Unordered pair of overlapping event indices, stored with first < second."""

    first: int
    second: int

    @classmethod
    def of(cls, a: int, b: int) -> "OverlapPair":
        if a > b:
            a, b = b, a
        return cls(a, b)


Cluster = tuple[int, ...]


@dataclass(frozen=True)
class OverlapReport:
    """Result of overlap detection over one list of events."""

    intervals: tuple[TimeInterval, ...]
    pairs: frozenset[OverlapPair]
    clusters: tuple[Cluster, ...]


@dataclass(frozen=True)
class SlotAssignment:
    """Horizontal sub-division of a day column given to one event."""

    slot_index: int
    slot_count: int


@dataclass(frozen=True)
class Configs:
    """Grid geometry parameters."""

    start_hour: int
    end_hour: int
    cell_width: float  # pixels per day column
    cell_height: float  # pixels per hour
    num_of_days: int
    num_of_days_per_page: int = field(default=5)
    time_ticks_width: float = field(default=30)

    @property
    def num_of_hours(self) -> int:
        """Number of hour rows drawn on the grid, both bounds included."""
        return self.end_hour - self.start_hour + 1


@dataclass(frozen=True)
class Rect:
    """Absolute pixel rectangle of an event on the grid."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LaidOutEvent:
    """An input event annotated with its slot and rectangle."""

    event: Event
    rect: Rect
    slot: SlotAssignment


@dataclass(frozen=True)
class SectionTimes:
    """Parallel lists describing the meetings of one course section."""

    start_times: tuple[str, ...]
    end_times: tuple[str, ...]
    days: tuple[int, ...]
    locations: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class EventGroup:
    """A course with its sections, expanded into flat events before layout."""

    course_id: str
    sections: dict[str, SectionTimes]
    title: str = field(default="")
