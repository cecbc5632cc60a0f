"""Overlap detection and clustering of timetable events."""

import logging
from collections import defaultdict
from typing import Optional, Sequence

from .clock import parse_clock
from .exceptions import InvalidEvent
from .models import Cluster, Event, OverlapPair, OverlapReport, TimeInterval
from .positioner import slot_order_key

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def to_interval(event: Event, index: Optional[int] = None) -> TimeInterval:
    """Validate an event and derive its time interval.

    Args:
        event: The event to convert.
        index: Position of the event in the caller's list, used in errors.

    Returns:
        The event's day and minutes-of-day range.

    Raises:
        InvalidEvent: If a time is malformed, the event has no duration or
            the day is not a weekday number 1-7.
    """
    day = event.day
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= DAYS_PER_WEEK:
        raise InvalidEvent(
            f"day must be 1-{DAYS_PER_WEEK}, got {day!r}", index, "day", day
        )

    try:
        start = parse_clock(event.start_time)
    except ValueError as e:
        raise InvalidEvent(str(e), index, "start_time", event.start_time) from e
    try:
        end = parse_clock(event.end_time)
    except ValueError as e:
        raise InvalidEvent(str(e), index, "end_time", event.end_time) from e

    if end <= start:
        raise InvalidEvent(
            f"end time {event.end_time} must be after start time {event.start_time}",
            index, "end_time", event.end_time
        )

    return TimeInterval(day, start, end)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Return True if two intervals share a day and intersect.

    Intervals are half-open, so back-to-back events do not overlap.
    """
    return a.day == b.day and a.start_minute < b.end_minute and a.end_minute > b.start_minute


def find_overlap_pairs(intervals: Sequence[TimeInterval]) -> frozenset[OverlapPair]:
    """Find every pair of overlapping intervals.

    Intervals are bucketed by day first so only same-day events are compared.

    Args:
        intervals: Intervals indexed by event position.

    Returns:
        Set of overlapping index pairs.
    """
    by_day: dict[int, list[int]] = defaultdict(list)
    for index, interval in enumerate(intervals):
        by_day[interval.day].append(index)

    pairs: set[OverlapPair] = set()
    for indices in by_day.values():
        for pos, i in enumerate(indices):
            for j in indices[pos + 1:]:
                if overlaps(intervals[i], intervals[j]):
                    pairs.add(OverlapPair.of(i, j))

    return frozenset(pairs)


class _DisjointSet:
    """Union-find over event indices with path halving."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, item: int) -> int:
        parent = self._parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: int, b: int) -> None:
        root_a, root_b = self.find(a), self.find(b)
        if root_a != root_b:
            # Smaller root wins so the representative does not depend on pair order
            if root_b < root_a:
                root_a, root_b = root_b, root_a
            self._parent[root_b] = root_a


def cluster_intervals(
    intervals: Sequence[TimeInterval],
    pairs: frozenset[OverlapPair]
) -> tuple[Cluster, ...]:
    """Group intervals into connected components of the overlap graph.

    Args:
        intervals: Intervals indexed by event position.
        pairs: Overlap edges between interval indices.

    Returns:
        Clusters of indices. Members are sorted by start minute then index,
        clusters by their earliest start minute then smallest index.
    """
    components = _DisjointSet(len(intervals))
    for pair in pairs:
        components.union(pair.first, pair.second)

    members: dict[int, list[int]] = defaultdict(list)
    for index in range(len(intervals)):
        members[components.find(index)].append(index)

    key = slot_order_key(intervals)
    clusters = [tuple(sorted(group, key=key)) for group in members.values()]
    clusters.sort(key=lambda cluster: (intervals[cluster[0]].start_minute, min(cluster)))

    return tuple(clusters)


def detect_overlaps(events: Sequence[Event]) -> OverlapReport:
    """Find overlapping event pairs and group them into clusters.

    Every event is validated before any comparison; the first invalid
    event aborts the call.

    Args:
        events: Events to analyse, referenced by their position.

    Returns:
        Report with the derived intervals, overlap pairs and clusters.
    """
    intervals = tuple(to_interval(event, index) for index, event in enumerate(events))
    return build_overlap_report(intervals)


def build_overlap_report(intervals: Sequence[TimeInterval]) -> OverlapReport:
    """Run pair detection and clustering over already validated intervals."""
    intervals = tuple(intervals)
    pairs = find_overlap_pairs(intervals)
    clusters = cluster_intervals(intervals, pairs)

    logger.debug(
        "Found %d overlap pairs in %d clusters across %d events",
        len(pairs), len(clusters), len(intervals)
    )
    return OverlapReport(intervals=intervals, pairs=pairs, clusters=clusters)
