"""Scraper module for reading schedule events from JSON documents and HTML tables."""

from .loader import events_from_json, load_schedule
from .models import Schedule
from .scraper import TableScraper

__all__ = ["Schedule", "TableScraper", "events_from_json", "load_schedule"]
