from __future__ import annotations

import pytest

from scraper import TableScraper
from timetable import Event, layout


LINK_TABLE = """
<html><body>
<table class="timetable">
  <tr><th></th><th>Mon</th><th>Tue</th><th>Wed</th></tr>
  <tr>
    <td>08:00</td>
    <td><b><a class="room_name">NE 234</a></b> [W] <a class="subject_name">Algebra</a> dr Jan Nowak</td>
    <td></td>
    <td></td>
  </tr>
  <tr>
    <td>09:00</td>
    <td><b><a class="room_name">NE 234</a></b> [W] <a class="subject_name">Algebra</a> dr Jan Nowak</td>
    <td>
      <a class="room_name">EA 630</a> [L] <a class="subject_name">Physics</a><br>
      <a class="room_name">EA 631</a> [P] <a class="subject_name">Databases</a>
    </td>
    <td></td>
  </tr>
  <tr>
    <td>10:00</td>
    <td></td>
    <td><a class="room_name">EA 630</a> [L] <a class="subject_name">Physics</a></td>
    <td><a class="subject_name">Seminar</a></td>
  </tr>
</table>
</body></html>
"""

TEXT_TABLE = """
<table>
  <tr><td>12:00</td><td>CS101 [A] (Room 5)<br>CS102</td></tr>
  <tr><td>12:30</td><td>CS101 [A] (Room 5)</td></tr>
</table>
"""


def test_parse_linked_entries_with_spans():
    events = TableScraper(LINK_TABLE).parse_events()

    assert events == [
        Event("Algebra", 1, "08:00", "10:00", location="NE 234", section="W"),
        Event("Physics", 2, "09:00", "11:00", location="EA 630", section="L"),
        Event("Databases", 2, "09:00", "10:00", location="EA 631", section="P"),
        Event("Seminar", 3, "10:00", "11:00"),
    ]


def test_parse_text_entries():
    events = TableScraper(TEXT_TABLE).parse_events()

    assert events == [
        Event("CS101", 1, "12:00", "13:30", location="Room 5", section="A"),
        Event("CS102", 1, "12:00", "12:30"),
    ]


def test_parsed_events_lay_out_side_by_side():
    schedule = TableScraper(LINK_TABLE).parse_schedule({"cell_width": 100})
    result = layout(schedule.events, schedule.configs)

    tuesday = [item for item in result if item.event.day == 2]
    assert [item.slot.slot_count for item in tuesday] == [2, 2]
    assert [item.rect.width for item in tuesday] == [50, 50]
    assert schedule.configs.start_hour == 8
    assert schedule.earliest_grid == 0


def test_missing_table_raises():
    with pytest.raises(ValueError, match="table not found"):
        TableScraper("<html><body><p>nothing</p></body></html>").parse_events()


def test_table_without_hours_raises():
    with pytest.raises(ValueError, match="No time slots"):
        TableScraper("<table><tr><td>Mon</td></tr></table>").parse_events()


def test_from_file(tmp_path):
    path = tmp_path / "timetable.html"
    path.write_text(TEXT_TABLE, encoding="utf-8")

    assert len(TableScraper.from_file(str(path)).parse_events()) == 2


def test_rows_with_non_ascii_hours_are_skipped():
    html = """
    <table>
      <tr><td>０９:００</td><td>Ghost</td></tr>
      <tr><td>10:00</td><td>CS101</td></tr>
    </table>
    """
    assert TableScraper(html).parse_events() == [Event("CS101", 1, "10:00", "11:00")]
