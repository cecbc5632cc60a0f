"""Loader for schedule documents in JSON format."""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from timetable.configs import CONFIG_KEY_ALIASES, DEFAULT_SCREEN_WIDTH, resolve_configs
from timetable.exceptions import InvalidEvent
from timetable.groups import expand_event_groups
from timetable.models import Event, EventGroup, SectionTimes

from .models import Schedule

logger = logging.getLogger(__name__)

# camelCase keys used by timetable documents written for JavaScript clients
KEY_ALIASES = {
    "courseId": "course_id",
    "startTime": "start_time",
    "endTime": "end_time",
    "groupIndex": "group_index",
    "startTimes": "start_times",
    "endTimes": "end_times",
    "eventGroups": "event_groups",
    **CONFIG_KEY_ALIASES,
}

EVENT_FIELDS = (
    "course_id", "day", "start_time", "end_time", "title",
    "location", "section", "color", "background", "group_index",
)
REQUIRED_EVENT_FIELDS = ("course_id", "day", "start_time", "end_time")
SECTION_TIME_FIELDS = ("start_times", "end_times", "days")


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {KEY_ALIASES.get(key, key): value for key, value in data.items()}


def _parse_event(raw: Any, index: int) -> Event:
    if not isinstance(raw, dict):
        raise InvalidEvent(f"expected an object, got {type(raw).__name__}", index)

    data = _normalize_keys(raw)
    for name in data:
        if name not in EVENT_FIELDS:
            raise InvalidEvent(f"unknown field {name!r}", index, name, data[name])
    for name in REQUIRED_EVENT_FIELDS:
        if name not in data:
            raise InvalidEvent(f"missing field {name!r}", index, name)

    return Event(**data)


def _parse_group(raw: Any, index: int) -> EventGroup:
    if not isinstance(raw, dict):
        raise InvalidEvent(f"Event group #{index} must be an object", field="event_groups")

    data = _normalize_keys(raw)
    if "course_id" not in data or not isinstance(data.get("sections"), dict):
        raise InvalidEvent(
            f"Event group #{index} needs course_id and a sections object",
            field="event_groups", value=index
        )

    sections: dict[str, SectionTimes] = {}
    for name, raw_times in data["sections"].items():
        if not isinstance(raw_times, dict):
            raise InvalidEvent(
                f"Section {name!r} of event group #{index} must be an object",
                field="sections", value=name
            )
        times = _normalize_keys(raw_times)
        if not any(key in times for key in SECTION_TIME_FIELDS):
            raise InvalidEvent(
                f"Section {name!r} of event group #{index} has no start_times, end_times or days",
                field="sections", value=name
            )
        sections[name] = SectionTimes(
            start_times=tuple(times.get("start_times", ())),
            end_times=tuple(times.get("end_times", ())),
            days=tuple(times.get("days", ())),
            locations=tuple(times.get("locations", ())),
        )

    return EventGroup(course_id=data["course_id"], sections=sections, title=data.get("title", ""))


def events_from_json(
    data: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
    screen_width: float = DEFAULT_SCREEN_WIDTH
) -> Schedule:
    """Build a schedule from a decoded JSON document.

    The document holds either a flat ``events`` list or ``event_groups``
    (courses with sections), plus optional partial ``configs``. Event groups
    take precedence and widen the grid to fit their events.

    Args:
        data: Decoded JSON object.
        overrides: Partial configs applied on top of the document's configs.
        screen_width: Width used to derive ``cell_width`` when not given.

    Returns:
        Schedule with events and resolved configs.

    Raises:
        ValueError: If the document is malformed (``InvalidEvent`` and
            ``InvalidConfig`` are both ``ValueError`` subclasses).
    """
    if not isinstance(data, Mapping):
        raise ValueError("Schedule document must be a JSON object")

    document = _normalize_keys(data)
    doc_configs = document.get("configs") or {}
    if not isinstance(doc_configs, dict):
        raise ValueError("'configs' must be a JSON object")

    partial = _normalize_keys(doc_configs)
    partial.update(_normalize_keys(overrides or {}))
    configs = resolve_configs(partial, screen_width)

    raw_groups = document.get("event_groups")
    if raw_groups:
        if document.get("events"):
            logger.warning("Document has both events and event_groups; using event_groups")
        groups = [_parse_group(raw, i) for i, raw in enumerate(raw_groups)]
        expanded = expand_event_groups(groups, configs)
        return Schedule(
            events=list(expanded.events),
            configs=expanded.configs,
            earliest_grid=expanded.earliest_grid,
        )

    raw_events = document.get("events") or []
    if not isinstance(raw_events, list):
        raise ValueError("'events' must be a JSON array")

    events = [_parse_event(raw, i) for i, raw in enumerate(raw_events)]
    logger.debug("Loaded %d events", len(events))
    return Schedule(events=events, configs=configs)


def load_schedule(
    path: str,
    overrides: Optional[Mapping[str, Any]] = None,
    screen_width: float = DEFAULT_SCREEN_WIDTH
) -> Schedule:
    """Read a schedule document from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or the document is malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Schedule file {path} is not valid JSON: {e}") from e

    return events_from_json(data, overrides, screen_width)
