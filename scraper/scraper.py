"""Schedule scraper for HTML timetable tables."""

import logging
import re
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, Tag

from timetable.clock import MINUTES_PER_HOUR, format_clock, parse_clock
from timetable.configs import DEFAULT_SCREEN_WIDTH, resolve_configs
from timetable.exceptions import InvalidEvent
from timetable.groups import fit_configs
from timetable.models import Event
from timetable.overlap import DAYS_PER_WEEK, to_interval

from .models import Schedule

logger = logging.getLogger(__name__)

_HOUR_RE = re.compile(r"^[0-9]{1,2}:[0-9]{2}$")
_SECTION_RE = re.compile(r"\[(\w+)\]")
_ROOM_RE = re.compile(r"^(.*?)\s*\(([^()]+)\)$")


class TableScraper:
    """Scraper for extracting events from an HTML timetable.

    The table has one row per time slot: the first cell holds the slot's
    "HH:MM" start and the following cells hold the entries for Monday,
    Tuesday and so on. An entry repeated in consecutive rows of the same
    column is one event spanning those rows.

    Entries are read from ``<a class="subject_name">`` links when a cell has
    them (room from a preceding ``room_name`` link, section from a preceding
    "[X]" code), otherwise from the cell's text lines written as
    ``COURSE [SECTION] (ROOM)``.
    """

    LAST_SLOT_MINUTES = MINUTES_PER_HOUR

    def __init__(self, html: str, parser: str = "lxml") -> None:
        """Initialize scraper with the page markup.

        Args:
            html: HTML document containing the timetable.
            parser: BeautifulSoup tree builder (default: lxml).
        """
        self._soup = BeautifulSoup(html, parser)

    @classmethod
    def from_file(cls, path: str, parser: str = "lxml") -> "TableScraper":
        return cls(Path(path).read_text(encoding="utf-8"), parser)

    def _find_table(self) -> Tag:
        table = self._soup.find("table", class_="timetable")
        if not table or not isinstance(table, Tag):
            table = self._soup.find("table")

        if not table or not isinstance(table, Tag):
            raise ValueError("Schedule table not found in the page")
        return table

    def _parse_link_entries(self, links: list[Tag]) -> list[dict[str, str]]:
        entries: list[dict[str, str]] = []
        for link in links:
            entry = {"course_id": link.get_text(strip=True), "section": "", "location": ""}

            for sibling in link.previous_siblings:
                if isinstance(sibling, Tag) and "subject_name" in (sibling.get("class") or []):
                    break
                if isinstance(sibling, Tag):
                    room = sibling if "room_name" in (sibling.get("class") or []) else sibling.find(
                        "a", class_="room_name"
                    )
                    if room and not entry["location"]:
                        entry["location"] = room.get_text(strip=True)
                text = sibling.get_text(strip=True) if isinstance(sibling, Tag) else str(sibling)
                code = _SECTION_RE.search(text)
                if code and not entry["section"]:
                    entry["section"] = code.group(1)

            entries.append(entry)
        return entries

    def _parse_text_entries(self, cell: Tag) -> list[dict[str, str]]:
        entries: list[dict[str, str]] = []
        for line in cell.get_text(separator="\n", strip=True).splitlines():
            line = line.strip()
            if not line:
                continue

            entry = {"course_id": line, "section": "", "location": ""}
            room = _ROOM_RE.match(line)
            if room:
                line, entry["location"] = room.group(1), room.group(2).strip()
            code = _SECTION_RE.search(line)
            if code:
                entry["section"] = code.group(1)
                line = _SECTION_RE.sub("", line)
            entry["course_id"] = line.strip()

            if entry["course_id"]:
                entries.append(entry)
        return entries

    def _parse_cell_content(self, cell: Tag) -> list[dict[str, str]]:
        """Parse a table cell into its entries (a cell may hold several)."""
        links = cell.find_all("a", class_="subject_name")
        if links:
            return self._parse_link_entries(links)
        return self._parse_text_entries(cell)

    def _read_grid(self) -> tuple[list[int], list[list[list[dict[str, str]]]]]:
        hours: list[int] = []
        cell_grid: list[list[list[dict[str, str]]]] = []

        for row in self._find_table().find_all("tr"):
            cells = row.find_all(["td", "th"])
            if not cells:
                continue

            first_text = cells[0].get_text(strip=True)
            if not _HOUR_RE.match(first_text):
                continue
            try:
                hours.append(parse_clock(first_text))
            except ValueError:
                logger.warning("Skipping row with invalid hour %r", first_text)
                continue

            cell_grid.append([self._parse_cell_content(cell) for cell in cells[1:1 + DAYS_PER_WEEK]])

        if not hours:
            raise ValueError("No time slots found in schedule table")
        return hours, cell_grid

    def parse_events(self) -> list[Event]:
        """Parse the timetable and extract all events.

        Returns:
            Events ordered by day, then start time.
        """
        hours, cell_grid = self._read_grid()
        events: list[Event] = []
        processed: set[tuple[int, int, int]] = set()  # (row, col, entry index)
        num_cols = max(len(row) for row in cell_grid)

        for col in range(num_cols):
            for row in range(len(cell_grid)):
                if col >= len(cell_grid[row]):
                    continue

                for entry_idx, entry in enumerate(cell_grid[row][col]):
                    if (row, col, entry_idx) in processed:
                        continue
                    processed.add((row, col, entry_idx))

                    # Count how many consecutive rows repeat the same entry
                    span = 1
                    while row + span < len(cell_grid) and col < len(cell_grid[row + span]):
                        next_cell = cell_grid[row + span][col]
                        match = next(
                            (i for i, other in enumerate(next_cell)
                             if other == entry and (row + span, col, i) not in processed),
                            None
                        )
                        if match is None:
                            break
                        processed.add((row + span, col, match))
                        span += 1

                    if row + span < len(hours):
                        end_minute = hours[row + span]
                    else:
                        end_minute = hours[-1] + self.LAST_SLOT_MINUTES

                    event = Event(
                        course_id=entry["course_id"],
                        day=col + 1,
                        start_time=format_clock(hours[row]),
                        end_time=format_clock(end_minute),
                        location=entry["location"],
                        section=entry["section"],
                    )
                    try:
                        to_interval(event)
                    except InvalidEvent as e:
                        logger.warning("Skipping invalid event %s: %s", event.label, e)
                        continue
                    events.append(event)

        logger.debug("Parsed %d events from %d time slots", len(events), len(hours))
        return events

    def parse_schedule(
        self,
        overrides: Optional[dict] = None,
        screen_width: float = DEFAULT_SCREEN_WIDTH
    ) -> Schedule:
        """Parse events and fit the resolved grid configs to them."""
        events = self.parse_events()
        configs, earliest_grid = fit_configs(events, resolve_configs(overrides, screen_width))
        return Schedule(events=events, configs=configs, earliest_grid=earliest_grid)
