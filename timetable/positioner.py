"""Slot assignment for overlap clusters."""

from typing import Callable, Sequence

from .models import Cluster, SlotAssignment, TimeInterval


def slot_order_key(intervals: Sequence[TimeInterval]) -> Callable[[int], tuple[int, int]]:
    """Key ordering event indices by start minute, then input position."""
    return lambda index: (intervals[index].start_minute, index)


def assign_slots(
    clusters: Sequence[Cluster],
    intervals: Sequence[TimeInterval]
) -> dict[int, SlotAssignment]:
    """Split each day column equally among the members of a cluster.
    
    Args:
        clusters: Connected components of the overlap graph.
        intervals: Intervals indexed by event position.
        
    Returns:
        Mapping from event index to its slot. A cluster of size k gives its
        members slots 0..k-1 ordered by start minute, then input position.
    """
    key = slot_order_key(intervals)
    slots: dict[int, SlotAssignment] = {}
    
    for cluster in clusters:
        count = len(cluster)
        for slot_index, event_index in enumerate(sorted(cluster, key=key)):
            slots[event_index] = SlotAssignment(slot_index=slot_index, slot_count=count)
    
    return slots
