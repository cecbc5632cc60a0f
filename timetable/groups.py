"""Expansion of course/section groups into flat events."""

import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .clock import MINUTES_PER_HOUR
from .exceptions import InvalidEvent
from .models import Configs, Event, EventGroup
from .overlap import DAYS_PER_WEEK, to_interval


@dataclass(frozen=True)
class ExpandedSchedule:
    """Flat events produced from event groups, with the grid fitted to them."""

    events: tuple[Event, ...]
    configs: Configs
    earliest_grid: Optional[int]  # hour row of the earliest event


def _section_events(group: EventGroup, group_index: int) -> list[Event]:
    events: list[Event] = []
    for section, times in group.sections.items():
        lengths = {len(times.start_times), len(times.end_times), len(times.days)}
        if times.locations:
            lengths.add(len(times.locations))
        if len(lengths) != 1:
            raise InvalidEvent(
                f"Section {section!r} of {group.course_id} has mismatched "
                f"start_times/end_times/days/locations lengths",
                field="sections", value=section
            )

        for i, day in enumerate(times.days):
            events.append(Event(
                course_id=group.course_id,
                day=day,
                start_time=times.start_times[i],
                end_time=times.end_times[i],
                title=group.title,
                location=times.locations[i] if times.locations else "",
                section=section,
                group_index=group_index,
            ))
    return events


def fit_configs(events: Sequence[Event], configs: Configs) -> tuple[Configs, Optional[int]]:
    """Widen the grid so that every event is visible.

    The grid's hours grow to cover the earliest start and the latest end, and
    the week grows to seven days when any event falls beyond ``num_of_days``.

    Returns:
        The fitted configs and the hour row of the earliest event, or
        ``None`` for an empty list.

    Raises:
        InvalidEvent: If an event is invalid.
    """
    if not events:
        return configs, None

    intervals = [to_interval(event, index) for index, event in enumerate(events)]
    first_start = min(interval.start_minute for interval in intervals)
    last_end = max(interval.end_minute for interval in intervals)
    last_day = max(interval.day for interval in intervals)

    start_hour = min(configs.start_hour, first_start // MINUTES_PER_HOUR)
    end_hour = max(configs.end_hour, math.ceil(last_end / MINUTES_PER_HOUR))
    num_of_days = DAYS_PER_WEEK if last_day > configs.num_of_days else configs.num_of_days

    fitted = replace(configs, start_hour=start_hour, end_hour=end_hour, num_of_days=num_of_days)
    return fitted, first_start // MINUTES_PER_HOUR - start_hour


def expand_event_groups(groups: Sequence[EventGroup], configs: Configs) -> ExpandedSchedule:
    """Expand event groups into events and fit the grid to them.

    Args:
        groups: Courses with their sections.
        configs: Resolved configs to start from.

    Returns:
        The flat events, the fitted configs and the earliest hour row.

    Raises:
        InvalidEvent: If a section is malformed or an event is invalid.
    """
    events: list[Event] = []
    for group_index, group in enumerate(groups):
        events.extend(_section_events(group, group_index))

    fitted, earliest_grid = fit_configs(events, configs)
    return ExpandedSchedule(events=tuple(events), configs=fitted, earliest_grid=earliest_grid)
