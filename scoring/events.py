"""Event identity: which rounds were "the same competitive round"."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from models.round import Round

NO_LEAGUE = "no_league"
NO_DATE = "no_date"
NO_COURSE = "no_course"
DEFAULT_HOLES = 18


def _date_part(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value or "").strip()
    # ISO timestamps collapse to their calendar day
    if len(text) >= 10 and text[4] == "-" and text[7] == "-":
        return text[:10]
    return text or NO_DATE


def _holes_part(value: Any) -> str:
    try:
        holes = int(value)
    except (TypeError, ValueError):
        return str(DEFAULT_HOLES)
    return str(holes) if holes > 0 else str(DEFAULT_HOLES)


def event_key(
    league_id: Optional[str],
    date_value: Any,
    course: Optional[str],
    holes: Any = DEFAULT_HOLES,
) -> str:
    """Canonical key for an event: league + calendar day + course + hole count.

    Course names are trimmed and case-folded so "Royal Birkdale" and
    "royal birkdale " land in the same event. Missing parts map to explicit
    sentinels, so incomplete rounds still group with each other.
    """
    league_part = str(league_id).strip() if league_id not in (None, "") else NO_LEAGUE
    course_part = str(course or "").strip().casefold() or NO_COURSE
    return "::".join([league_part, _date_part(date_value), course_part, _holes_part(holes)])


def round_event_key(round_obj: Round) -> str:
    return event_key(round_obj.league_id, round_obj.date, round_obj.course, round_obj.holes)


def rounds_in_event(rounds: Iterable[Round], key: str) -> List[Round]:
    """All rounds whose event key matches, in collection order."""
    return [r for r in rounds if round_event_key(r) == key]


def group_by_event(rounds: Iterable[Round]) -> Dict[str, List[Round]]:
    """Group rounds by event key, preserving first-seen order of events."""
    groups: Dict[str, List[Round]] = {}
    for round_obj in rounds:
        groups.setdefault(round_event_key(round_obj), []).append(round_obj)
    return groups
