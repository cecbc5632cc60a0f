"""Mapping of laid-out events to pixel rectangles."""

from typing import Optional

from .clock import MINUTES_PER_HOUR
from .exceptions import OutOfGridRange
from .models import Configs, Event, Rect, SlotAssignment, TimeInterval
from .overlap import to_interval


def check_grid_range(
    interval: TimeInterval,
    configs: Configs,
    index: Optional[int] = None
) -> None:
    """Ensure an interval lies between the grid's start and end hours.
    
    Raises:
        OutOfGridRange: If the interval starts before ``start_hour`` or ends
            after ``end_hour``.
    """
    grid_start = configs.start_hour * MINUTES_PER_HOUR
    grid_end = configs.end_hour * MINUTES_PER_HOUR
    
    if interval.start_minute < grid_start:
        raise OutOfGridRange(
            f"starts before the grid opens at {configs.start_hour}:00",
            index, "start_time", interval.start_minute
        )
    if interval.end_minute > grid_end:
        raise OutOfGridRange(
            f"ends after the grid closes at {configs.end_hour}:00",
            index, "end_time", interval.end_minute
        )


def check_slot(slot: SlotAssignment) -> None:
    """Ensure a slot lies inside its day column.
    
    Raises:
        ValueError: If the slot count is not positive or the index is not
            within 0..slot_count-1.
    """
    if slot.slot_count < 1:
        raise ValueError(f"slot_count must be at least 1, got {slot.slot_count}")
    if not 0 <= slot.slot_index < slot.slot_count:
        raise ValueError(
            f"slot_index must be 0-{slot.slot_count - 1}, got {slot.slot_index}"
        )


def interval_rect(interval: TimeInterval, slot: SlotAssignment, configs: Configs) -> Rect:
    """Compute the rectangle of an already validated interval."""
    check_slot(slot)
    column_width = configs.cell_width
    slot_width = column_width / slot.slot_count
    
    start_hour, start_minute = divmod(interval.start_minute, MINUTES_PER_HOUR)
    y = (start_hour - configs.start_hour) * configs.cell_height
    y += (start_minute / MINUTES_PER_HOUR) * configs.cell_height
    
    return Rect(
        x=(interval.day - 1) * column_width + slot.slot_index * slot_width,
        y=y,
        width=slot_width,
        height=configs.cell_height * interval.duration / MINUTES_PER_HOUR,
    )


def to_rect(event: Event, slot: SlotAssignment, configs: Configs) -> Rect:
    """Compute the absolute pixel rectangle of an event.
    
    Args:
        event: The event to place.
        slot: Horizontal slot of the event within its day column.
        configs: Grid geometry.
        
    Returns:
        Rectangle in pixels, relative to the top-left corner of the grid.
        
    Raises:
        InvalidEvent: If the event itself is malformed.
        OutOfGridRange: If the event does not fit the grid's hours.
        ValueError: If the slot does not lie inside the day column.
    """
    interval = to_interval(event)
    check_grid_range(interval, configs)
    return interval_rect(interval, slot, configs)
