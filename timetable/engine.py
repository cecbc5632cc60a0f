"""Layout engine composing overlap detection, slotting and geometry."""

import logging
from typing import Sequence

from .configs import validate_configs
from .exceptions import InvalidEvent
from .geometry import check_grid_range, interval_rect
from .models import Configs, Event, LaidOutEvent, TimeInterval
from .overlap import build_overlap_report, to_interval
from .positioner import assign_slots

logger = logging.getLogger(__name__)


def _validate_events(events: Sequence[Event], configs: Configs) -> list[TimeInterval]:
    intervals: list[TimeInterval] = []
    for index, event in enumerate(events):
        interval = to_interval(event, index)
        if interval.day > configs.num_of_days:
            raise InvalidEvent(
                f"day must be 1-{configs.num_of_days}, got {event.day}",
                index, "day", event.day
            )
        check_grid_range(interval, configs, index)
        intervals.append(interval)
    return intervals


def layout(events: Sequence[Event], configs: Configs) -> list[LaidOutEvent]:
    """Place events on the weekly grid.
    
    Configs and every event are validated before any layout work; the first
    violation aborts the call. Overlapping events share their day column
    in equal slots.
    
    Args:
        events: Events to place. They are not modified.
        configs: Grid geometry.
        
    Returns:
        One laid-out record per event, in input order.
        
    Raises:
        InvalidConfig: If the configs are invalid.
        InvalidEvent: If an event is malformed or outside the configured days.
        OutOfGridRange: If an event does not fit the grid's hours.
    """
    validate_configs(configs)
    intervals = _validate_events(events, configs)
    
    report = build_overlap_report(intervals)
    slots = assign_slots(report.clusters, report.intervals)
    
    laid_out = [
        LaidOutEvent(event=event, rect=interval_rect(interval, slots[index], configs), slot=slots[index])
        for index, (event, interval) in enumerate(zip(events, intervals))
    ]
    logger.debug("Laid out %d events in %d clusters", len(laid_out), len(report.clusters))
    return laid_out


class LayoutEngine:
    """Holds grid configs for repeated layout passes."""
    
    def __init__(self, configs: Configs) -> None:
        self._configs = validate_configs(configs)
    
    @property
    def configs(self) -> Configs:
        return self._configs
    
    def layout(self, events: Sequence[Event]) -> list[LaidOutEvent]:
        return layout(events, self._configs)
