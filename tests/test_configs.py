from __future__ import annotations

import json

import pytest

from timetable import Configs, InvalidConfig, load_configs, read_config_file, resolve_configs, validate_configs
from timetable.configs import DEFAULTS


def test_defaults_derive_cell_width_from_screen():
    configs = resolve_configs(screen_width=430)

    assert configs.start_hour == DEFAULTS["start_hour"]
    assert configs.end_hour == DEFAULTS["end_hour"]
    assert configs.cell_width == pytest.approx((430 - 30) / 5)
    assert configs.num_of_hours == configs.end_hour - configs.start_hour + 1


def test_overrides_win_over_defaults():
    configs = resolve_configs({"start_hour": 7, "end_hour": 22, "cell_width": 80, "num_of_days": 7})

    assert (configs.start_hour, configs.end_hour, configs.cell_width, configs.num_of_days) == (7, 22, 80, 7)
    assert configs.num_of_hours == 16


def test_none_overrides_are_ignored():
    assert resolve_configs({"start_hour": None}).start_hour == DEFAULTS["start_hour"]


def test_unknown_key_is_rejected():
    with pytest.raises(InvalidConfig) as excinfo:
        resolve_configs({"first_hour": 9})
    assert excinfo.value.field == "first_hour"


def test_camel_case_keys_are_accepted():
    configs = resolve_configs({"startHour": 7, "endHour": 21, "cellWidth": 70, "numOfDays": 6})

    assert (configs.start_hour, configs.end_hour, configs.cell_width, configs.num_of_days) == (7, 21, 70, 6)


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"start_hour": 9, "end_hour": 9}, "end_hour"),
        ({"start_hour": 12, "end_hour": 10}, "end_hour"),
        ({"cell_width": 0}, "cell_width"),
        ({"cell_height": -5}, "cell_height"),
        ({"num_of_days": 0}, "num_of_days"),
        ({"end_hour": 25}, "end_hour"),
        ({"start_hour": "8"}, "start_hour"),
        ({"num_of_days": 5.5}, "num_of_days"),
    ],
)
def test_invalid_configs(overrides, field):
    with pytest.raises(InvalidConfig) as excinfo:
        resolve_configs(overrides)
    assert excinfo.value.field == field


def test_validate_returns_configs():
    configs = Configs(start_hour=0, end_hour=24, cell_width=1, cell_height=1, num_of_days=1)
    assert validate_configs(configs) is configs


def test_invalid_config_is_a_value_error():
    with pytest.raises(ValueError):
        resolve_configs({"cell_height": 0})


def test_load_configs_from_file(tmp_path):
    path = tmp_path / "grid.json"
    path.write_text(json.dumps({"start_hour": 6, "cell_height": 40}), encoding="utf-8")

    configs = load_configs(str(path))

    assert configs.start_hour == 6
    assert configs.cell_height == 40


def test_load_configs_requires_object(tmp_path):
    path = tmp_path / "grid.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(InvalidConfig):
        load_configs(str(path))


def test_config_file_accepts_camel_case_keys(tmp_path):
    path = tmp_path / "grid.json"
    path.write_text(json.dumps({"startHour": 6, "cellHeight": 40}), encoding="utf-8")

    assert read_config_file(str(path)) == {"start_hour": 6, "cell_height": 40}
    assert load_configs(str(path)).start_hour == 6
