"""Resolution and validation of grid configs."""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import InvalidConfig
from .models import Configs

logger = logging.getLogger(__name__)

DEFAULT_SCREEN_WIDTH = 390
DEFAULTS: dict[str, Any] = {
    "start_hour": 8,
    "end_hour": 20,
    "cell_height": 60,
    "num_of_days": 5,
    "num_of_days_per_page": 5,
    "time_ticks_width": 30,
}

# camelCase keys used by timetable configs written for JavaScript clients
CONFIG_KEY_ALIASES = {
    "startHour": "start_hour",
    "endHour": "end_hour",
    "cellWidth": "cell_width",
    "cellHeight": "cell_height",
    "numOfDays": "num_of_days",
    "numOfDaysPerPage": "num_of_days_per_page",
    "timeTicksWidth": "time_ticks_width",
}

_INT_FIELDS = {"start_hour", "end_hour", "num_of_days", "num_of_days_per_page"}
_FIELD_NAMES = tuple(f.name for f in fields(Configs))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_configs(configs: Configs) -> Configs:
    """Check grid config invariants.

    Args:
        configs: Configs to check.

    Returns:
        The same configs, for chaining.

    Raises:
        InvalidConfig: On the first broken invariant.
    """
    for name in _FIELD_NAMES:
        value = getattr(configs, name)
        if not _is_number(value):
            raise InvalidConfig(f"{name} must be a number, got {value!r}", name, value)
        if name in _INT_FIELDS and not isinstance(value, int):
            raise InvalidConfig(f"{name} must be an integer, got {value!r}", name, value)

    if not 0 <= configs.start_hour <= 24:
        raise InvalidConfig(
            f"start_hour must be 0-24, got {configs.start_hour}", "start_hour", configs.start_hour
        )
    if not 0 <= configs.end_hour <= 24:
        raise InvalidConfig(
            f"end_hour must be 0-24, got {configs.end_hour}", "end_hour", configs.end_hour
        )
    if configs.end_hour <= configs.start_hour:
        raise InvalidConfig(
            f"end_hour ({configs.end_hour}) must be after start_hour ({configs.start_hour})",
            "end_hour", configs.end_hour
        )
    if configs.cell_width <= 0:
        raise InvalidConfig("cell_width must be positive", "cell_width", configs.cell_width)
    if configs.cell_height <= 0:
        raise InvalidConfig("cell_height must be positive", "cell_height", configs.cell_height)
    if configs.num_of_days < 1:
        raise InvalidConfig("num_of_days must be at least 1", "num_of_days", configs.num_of_days)
    if configs.num_of_days_per_page < 1:
        raise InvalidConfig(
            "num_of_days_per_page must be at least 1",
            "num_of_days_per_page", configs.num_of_days_per_page
        )

    return configs


def resolve_configs(
    overrides: Optional[Mapping[str, Any]] = None,
    screen_width: float = DEFAULT_SCREEN_WIDTH
) -> Configs:
    """Merge partial configs with defaults.

    When ``cell_width`` is not given it is derived so that
    ``num_of_days_per_page`` columns fill the screen next to the time ticks.

    Args:
        overrides: Partial configs in snake_case or camelCase; ``None``
            values are ignored.
        screen_width: Width in pixels available to the grid.

    Returns:
        Validated configs.

    Raises:
        InvalidConfig: For unknown keys or broken invariants.
    """
    merged = dict(DEFAULTS)
    for key, value in (overrides or {}).items():
        key = CONFIG_KEY_ALIASES.get(key, key)
        if key not in _FIELD_NAMES:
            raise InvalidConfig(f"Unknown config key: {key!r}", key, value)
        if value is not None:
            merged[key] = value

    if "cell_width" not in merged:
        ticks = merged["time_ticks_width"]
        per_page = merged["num_of_days_per_page"]
        if not (_is_number(ticks) and _is_number(per_page)) or per_page < 1:
            raise InvalidConfig(
                "Cannot derive cell_width from time_ticks_width and num_of_days_per_page",
                "cell_width", None
            )
        merged["cell_width"] = (screen_width - ticks) / per_page

    configs = validate_configs(Configs(**merged))
    logger.debug("Resolved configs: %s", configs)
    return configs


def read_config_file(path: str) -> dict[str, Any]:
    """Read partial configs from a JSON file without resolving them.

    camelCase keys are renamed to their snake_case config fields.

    Raises:
        InvalidConfig: If the file does not hold a JSON object.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidConfig(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfig(f"Config file {path} must contain a JSON object")

    return {CONFIG_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def load_configs(path: str, screen_width: float = DEFAULT_SCREEN_WIDTH) -> Configs:
    """Read partial configs from a JSON file and resolve them."""
    return resolve_configs(read_config_file(path), screen_width)
