# itinerary_parser.py
# Turns free-form model itinerary text into day plans + duration.
# Never raises: missing structure degrades to generic filler days.

from __future__ import annotations
import re
from typing import List, Tuple
from models import DayPlan

DEFAULT_DURATION = "5 Days"
MAX_DAYS = 7
MIN_DAYS = 3
MAX_ACTIVITIES = 4

_DURATION_RE = re.compile(r"(\d+)[ \t-]*days?\b", re.IGNORECASE)
_DAY_MARKER_RE = re.compile(r"\bday[ \t]*\d+", re.IGNORECASE)
_BULLET_RE = re.compile(r"[-•*]")
_LEADING_BULLET_RE = re.compile(r"^\s*[-•*]+\s*")
_TITLE_LINE_RE = re.compile(r"^[\s#*]*title\s*[:\-]\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_HEADING_RE = re.compile(r"^\s*#+\s*(.+)$", re.MULTILINE)


def fallback_activities(location: str) -> List[str]:
    return [
        f"Explore the highlights of {location}",
        f"Try the local cuisine in {location}",
        f"Enjoy cultural activities around {location}",
    ]


def parse_duration(text: str) -> str:
    """First '<N> day(s)' in the text, formatted as '<N> Days'."""
    m = _DURATION_RE.search(text or "")
    if not m:
        return DEFAULT_DURATION
    return f"{int(m.group(1))} Days"


def _parse_day(fragment: str, n: int, location: str) -> DayPlan:
    lines = [ln.strip() for ln in fragment.splitlines() if ln.strip()]
    title = re.sub(r"^[:\-\s]+", "", lines[0]).strip() if lines else ""
    if not title:
        title = f"Day {n} in {location}"

    activities: List[str] = []
    for ln in lines[1:]:
        if not _BULLET_RE.search(ln):
            continue
        item = _LEADING_BULLET_RE.sub("", ln).strip()
        if item:
            activities.append(item)
        if len(activities) == MAX_ACTIVITIES:
            break
    if not activities:
        activities = fallback_activities(location)

    return DayPlan(day=n, title=title, activities=activities)


def parse_itinerary(text: str, location: str) -> Tuple[List[DayPlan], str]:
    """
    Split on 'day N' markers (preamble dropped, at most 7 sections) and
    number days by position; the numbers written in the text are ignored.
    Pads with 'Day <n> - Exploring <location>' until there are 3 days.
    """
    text = text or ""
    duration = parse_duration(text)

    fragments = _DAY_MARKER_RE.split(text)[1:MAX_DAYS + 1]
    days = [_parse_day(frag, i, location) for i, frag in enumerate(fragments, start=1)]

    while len(days) < MIN_DAYS:
        n = len(days) + 1
        days.append(DayPlan(
            day=n,
            title=f"Day {n} - Exploring {location}",
            activities=fallback_activities(location),
        ))
    return days, duration


def extract_title(text: str, location: str) -> str:
    """'Title:' line, else first non-day Markdown heading, else a generic title."""
    text = text or ""
    m = _TITLE_LINE_RE.search(text)
    if m:
        title = m.group(1).strip().strip("*#").strip()
        if title:
            return title
    for h in _HEADING_RE.finditer(text):
        heading = h.group(1).strip().strip("*#").strip()
        if heading and not _DAY_MARKER_RE.match(heading):
            return heading
    return f"{location} Travel Itinerary"
