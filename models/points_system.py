"""League points configuration.

A league scores rounds in exactly one of two modes:

- ``league``: placement table + optional participation and bonus points.
- ``legacy``: flat base points plus per-event bonuses, scaled on major days.

Every field has a documented default and malformed values are coerced rather
than raised, so a half-configured league never breaks a score preview.
"""

import math
from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import AliasChoices, Field, field_validator, model_validator

from .base import BaseLeagueModel

DEFAULT_PLACEMENT_POINTS: Dict[int, int] = {1: 3, 2: 2, 3: 0}
DEFAULT_PARTICIPATION_POINTS = 1
DEFAULT_BONUS_POINTS: Dict[str, int] = {"birdie": 1, "eagle": 2, "hole_in_one": 5}

DEFAULT_BASE_POINTS = 10.0
DEFAULT_BIRDIE_POINTS = 2.0
DEFAULT_EAGLE_POINTS = 5.0
DEFAULT_HOLE_IN_ONE_POINTS = 20.0
DEFAULT_MAJOR_MULTIPLIER = 2.0

PLACEMENT_KEYS = ("placement_points", "placementPoints", "placement", "positions", "pointsTable")
LEGACY_KEYS = (
    "base_points", "basePoints", "baseRound", "base", "participationPoints",
    "birdie_points", "birdiePoints", "eagle_points", "eaglePoints",
    "hole_in_one_points", "holeInOnePoints", "hioPoints",
    "major_multiplier", "majorMultiplier", "multiplier",
)

_BONUS_ALIASES = {
    "birdie": ("birdie", "birdies"),
    "eagle": ("eagle", "eagles"),
    "hole_in_one": ("hole_in_one", "holeInOne", "hio"),
}


def _as_number(value: Any) -> Optional[float]:
    """Finite float for numbers and numeric strings, else None. Booleans are not numbers."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_points(value: Any, default: int) -> int:
    """Non-negative integer points, falling back to ``default`` when malformed."""
    number = _as_number(value)
    if number is None:
        return default
    return max(0, int(number))


def coerce_float(value: Any, default: float) -> float:
    number = _as_number(value)
    if number is None:
        return default
    return max(0.0, number)


def coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
    return default


def _as_mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def normalize_placement_table(value: Any) -> Dict[int, int]:
    """Clean a rank -> points table.

    Keys that are not positive integers are dropped, non-numeric points become 0.
    An empty or unusable table falls back to DEFAULT_PLACEMENT_POINTS.
    """
    table: Dict[int, int] = {}
    for raw_rank, raw_points in _as_mapping(value).items():
        rank = _as_number(raw_rank)
        if rank is None or int(rank) <= 0:
            continue
        table[int(rank)] = coerce_points(raw_points, 0)
    return table or dict(DEFAULT_PLACEMENT_POINTS)


class ParticipationRule(BaseLeagueModel):
    """Flat points for having played."""
    enabled: bool = False
    points: int = DEFAULT_PARTICIPATION_POINTS

    @field_validator("enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, v):
        return coerce_bool(v, False)

    @field_validator("points", mode="before")
    @classmethod
    def _coerce_points(cls, v):
        return coerce_points(v, DEFAULT_PARTICIPATION_POINTS)


class BonusRule(BaseLeagueModel):
    """Points for a scoring event occurring at least once in a round."""
    enabled: bool = False
    points: int = Field(0, ge=0)

    @field_validator("enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, v):
        return coerce_bool(v, False)


class BonusRules(BaseLeagueModel):
    enabled: bool = False
    birdie: BonusRule = Field(default_factory=lambda: BonusRule(points=DEFAULT_BONUS_POINTS["birdie"]))
    eagle: BonusRule = Field(default_factory=lambda: BonusRule(points=DEFAULT_BONUS_POINTS["eagle"]))
    hole_in_one: BonusRule = Field(
        default_factory=lambda: BonusRule(points=DEFAULT_BONUS_POINTS["hole_in_one"])
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_rules(cls, data):
        # Each bonus type has its own default, so malformed points are fixed here
        # rather than on BonusRule.
        if isinstance(data, BaseLeagueModel):
            return data
        raw = _as_mapping(data)
        normalized: Dict[str, Any] = {"enabled": coerce_bool(raw.get("enabled"), False)}
        for name, aliases in _BONUS_ALIASES.items():
            rule = next((raw[a] for a in aliases if a in raw), None)
            if isinstance(rule, BonusRule):
                normalized[name] = rule
                continue
            rule = _as_mapping(rule)
            normalized[name] = {
                "enabled": coerce_bool(rule.get("enabled"), False),
                "points": coerce_points(rule.get("points"), DEFAULT_BONUS_POINTS[name]),
            }
        return normalized

    def rule_for(self, name: str) -> BonusRule:
        return getattr(self, name)


class LeaguePointsSystem(BaseLeagueModel):
    """Placement-based scoring with optional participation and bonus points."""
    mode: Literal["league"] = "league"
    placement_points: Dict[int, int] = Field(
        default_factory=lambda: dict(DEFAULT_PLACEMENT_POINTS),
        validation_alias=AliasChoices(*PLACEMENT_KEYS),
    )
    participation: ParticipationRule = Field(default_factory=ParticipationRule)
    bonuses: BonusRules = Field(default_factory=BonusRules)

    @field_validator("mode", mode="before")
    @classmethod
    def _force_mode(cls, v):
        # Older configs carry a ranking mode such as "medal" here.
        return "league"

    @field_validator("placement_points", mode="before")
    @classmethod
    def _clean_table(cls, v):
        return normalize_placement_table(v)

    @field_validator("participation", mode="before")
    @classmethod
    def _participation_mapping(cls, v):
        return v if isinstance(v, ParticipationRule) else _as_mapping(v)

    @field_validator("bonuses", mode="before")
    @classmethod
    def _bonuses_mapping(cls, v):
        return v if isinstance(v, BonusRules) else _as_mapping(v)

    def points_for_rank(self, rank: Optional[int]) -> int:
        """Table value for a rank; 0 when unranked or beyond the table."""
        if rank is None or rank <= 0:
            return 0
        return self.placement_points.get(rank, 0)


class LegacyPointsSystem(BaseLeagueModel):
    """Flat formula: base + per-event bonuses, times the major multiplier on major days."""
    mode: Literal["legacy"] = "legacy"
    base_points: float = Field(
        DEFAULT_BASE_POINTS,
        validation_alias=AliasChoices("base_points", "basePoints", "baseRound", "base", "participationPoints"),
    )
    birdie_points: float = Field(
        DEFAULT_BIRDIE_POINTS,
        validation_alias=AliasChoices("birdie_points", "birdiePoints", "birdie"),
    )
    eagle_points: float = Field(
        DEFAULT_EAGLE_POINTS,
        validation_alias=AliasChoices("eagle_points", "eaglePoints", "eagle"),
    )
    hole_in_one_points: float = Field(
        DEFAULT_HOLE_IN_ONE_POINTS,
        validation_alias=AliasChoices("hole_in_one_points", "holeInOnePoints", "hioPoints", "hio"),
    )
    major_multiplier: float = Field(
        DEFAULT_MAJOR_MULTIPLIER,
        validation_alias=AliasChoices("major_multiplier", "majorMultiplier", "multiplier"),
    )

    @field_validator("mode", mode="before")
    @classmethod
    def _force_mode(cls, v):
        return "legacy"

    @field_validator("base_points", mode="before")
    @classmethod
    def _coerce_base(cls, v):
        return coerce_float(v, DEFAULT_BASE_POINTS)

    @field_validator("birdie_points", mode="before")
    @classmethod
    def _coerce_birdie(cls, v):
        return coerce_float(v, DEFAULT_BIRDIE_POINTS)

    @field_validator("eagle_points", mode="before")
    @classmethod
    def _coerce_eagle(cls, v):
        return coerce_float(v, DEFAULT_EAGLE_POINTS)

    @field_validator("hole_in_one_points", mode="before")
    @classmethod
    def _coerce_hole_in_one(cls, v):
        return coerce_float(v, DEFAULT_HOLE_IN_ONE_POINTS)

    @field_validator("major_multiplier", mode="before")
    @classmethod
    def _coerce_multiplier(cls, v):
        # Missing or unreadable -> default; zero or negative would wipe out a major-day round.
        number = _as_number(v)
        if number is None:
            return DEFAULT_MAJOR_MULTIPLIER
        return number if number > 0 else 1.0


PointsSystem = Union[LeaguePointsSystem, LegacyPointsSystem]


def resolve_points_system(raw: Any) -> PointsSystem:
    """Turn a stored (possibly partial or malformed) config into a points system.

    - nothing configured -> legacy defaults
    - ``mode: "legacy"`` or only legacy keys -> legacy
    - anything else -> league
    """
    if isinstance(raw, (LeaguePointsSystem, LegacyPointsSystem)):
        return raw
    data = _as_mapping(raw)
    if not data:
        return LegacyPointsSystem()

    mode = data.get("mode")
    if mode == "legacy":
        return LegacyPointsSystem.model_validate(data)
    if mode != "league":
        has_placement = any(k in data for k in PLACEMENT_KEYS)
        has_legacy = any(k in data for k in LEGACY_KEYS)
        if has_legacy and not has_placement:
            return LegacyPointsSystem.model_validate(data)
    return LeaguePointsSystem.model_validate(data)
