from __future__ import annotations

import pytest

from timetable import Configs, Event, InvalidEvent, OutOfGridRange, Rect, SlotAssignment, to_rect


CONFIGS = Configs(start_hour=8, end_hour=20, cell_width=100, cell_height=60, num_of_days=5)


def ev(day: int, start: str, end: str) -> Event:
    return Event(course_id="CS101", day=day, start_time=start, end_time=end)


def test_full_width_rect():
    rect = to_rect(ev(1, "09:00", "10:30"), SlotAssignment(0, 1), CONFIGS)
    assert rect == Rect(x=0, y=60, width=100, height=90)


def test_day_offsets_x_by_column_width():
    rect = to_rect(ev(3, "08:00", "09:00"), SlotAssignment(0, 1), CONFIGS)
    assert rect.x == 200
    assert rect.y == 0


def test_minutes_offset_y():
    rect = to_rect(ev(2, "10:15", "10:45"), SlotAssignment(0, 1), CONFIGS)
    assert rect.y == pytest.approx(2 * 60 + 15)
    assert rect.height == pytest.approx(30)


def test_slots_divide_the_column():
    rects = [to_rect(ev(2, "09:00", "10:00"), SlotAssignment(i, 3), CONFIGS) for i in range(3)]

    assert [r.x for r in rects] == pytest.approx([100, 100 + 100 / 3, 100 + 200 / 3])
    assert sum(r.width for r in rects) == pytest.approx(CONFIGS.cell_width)


def test_event_may_touch_grid_bounds():
    rect = to_rect(ev(1, "08:00", "20:00"), SlotAssignment(0, 1), CONFIGS)
    assert rect.height == 12 * 60


@pytest.mark.parametrize(
    "start, end, field",
    [("07:30", "09:00", "start_time"), ("19:00", "20:30", "end_time"), ("21:00", "22:00", "end_time")],
)
def test_out_of_grid_range(start, end, field):
    with pytest.raises(OutOfGridRange) as excinfo:
        to_rect(ev(1, start, end), SlotAssignment(0, 1), CONFIGS)
    assert excinfo.value.field == field


def test_invalid_event_is_reported():
    with pytest.raises(InvalidEvent):
        to_rect(ev(1, "10:00", "09:00"), SlotAssignment(0, 1), CONFIGS)


@pytest.mark.parametrize("slot", [SlotAssignment(0, 0), SlotAssignment(2, 2), SlotAssignment(-1, 3)])
def test_slot_outside_column_is_rejected(slot):
    with pytest.raises(ValueError, match="slot_"):
        to_rect(ev(1, "09:00", "10:00"), slot, CONFIGS)


def test_last_slot_ends_at_column_edge():
    rect = to_rect(ev(2, "09:00", "10:00"), SlotAssignment(3, 4), CONFIGS)
    assert rect.x + rect.width == pytest.approx(200)
