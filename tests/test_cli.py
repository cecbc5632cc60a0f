from __future__ import annotations

import json

from timetable_grid import main


def write_schedule(tmp_path, events, configs=None):
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps({"configs": configs or {}, "events": events}), encoding="utf-8")
    return str(path)


EVENTS = [
    {"course_id": "A", "day": 1, "start_time": "09:00", "end_time": "10:00"},
    {"course_id": "B", "day": 1, "start_time": "09:30", "end_time": "10:30"},
]


def test_prints_json_layout(tmp_path, capsys):
    path = write_schedule(tmp_path, EVENTS)

    assert main([path, "--cell-width", "100"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert [e["slot"]["slot_count"] for e in document["events"]] == [2, 2]
    assert document["configs"]["cell_width"] == 100


def test_config_file_and_flags(tmp_path, capsys):
    path = write_schedule(tmp_path, [{"course_id": "A", "day": 1, "start_time": "07:00", "end_time": "08:00"}])
    config = tmp_path / "grid.json"
    config.write_text(json.dumps({"start_hour": 6, "cell_height": 40}), encoding="utf-8")

    assert main([path, "--config", str(config), "--cell-height", "30"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert document["configs"]["start_hour"] == 6
    assert document["events"][0]["rect"]["y"] == 30


def test_out_of_range_event_reports_error(tmp_path, capsys):
    path = write_schedule(tmp_path, [{"course_id": "A", "day": 1, "start_time": "06:00", "end_time": "07:00"}])

    assert main([path]) == 1
    assert "starts before" in capsys.readouterr().err


def test_invalid_config_reports_error(tmp_path, capsys):
    path = write_schedule(tmp_path, EVENTS, {"start_hour": 9, "end_hour": 9})

    assert main([path]) == 1
    assert "end_hour" in capsys.readouterr().err


def test_ics_output(tmp_path):
    path = write_schedule(tmp_path, EVENTS)
    output = tmp_path / "out"

    code = main([path, "--format", "ics", "--start-date", "2026-02-23", "--end-date", "2026-06-30", "-o", str(output)])

    assert code == 0
    assert b"BEGIN:VEVENT" in (tmp_path / "out.ics").read_bytes()


def test_ics_requires_dates(tmp_path, capsys):
    path = write_schedule(tmp_path, EVENTS)

    assert main([path, "--format", "ics"]) == 1
    assert "--start-date" in capsys.readouterr().err


def test_html_input(tmp_path, capsys):
    html = tmp_path / "timetable.html"
    html.write_text("<table><tr><td>10:00</td><td>CS101</td><td>CS102</td></tr></table>", encoding="utf-8")

    assert main([str(html), "--html"]) == 0

    document = json.loads(capsys.readouterr().out)
    assert [e["day"] for e in document["events"]] == [1, 2]


def test_camel_case_config_file(tmp_path, capsys):
    path = write_schedule(tmp_path, [{"course_id": "A", "day": 1, "start_time": "07:00", "end_time": "08:00"}])
    config = tmp_path / "grid.json"
    config.write_text(json.dumps({"startHour": 6, "cellHeight": 40}), encoding="utf-8")

    assert main([path, "--config", str(config)]) == 0

    document = json.loads(capsys.readouterr().out)
    assert document["configs"]["start_hour"] == 6
    assert document["events"][0]["rect"]["y"] == 40
