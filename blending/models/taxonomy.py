"""
Taxonomy — the fixed, shared genre and mechanic enumerations plus era buckets.

Labels are resolved to integer indices once, at import time. Every feature
vector in the process is laid out against these lists, so the builder that
produced a catalog and the engine comparing it must agree on them.
Labels are only used for human-facing text; comparisons go through indices.
"""

import re
from enum import Enum
from typing import Dict, Optional, Tuple

GENRES: Tuple[str, ...] = (
    "Action",
    "Adventure",
    "RPG",
    "Strategy",
    "Puzzle",
    "Platform",
    "Shooter",
    "Fighting",
    "Racing",
    "Sports",
    "Simulation",
    "Horror",
)

MECHANICS: Tuple[str, ...] = (
    "Combat",
    "Exploration",
    "Puzzle Solving",
    "Platform Jumping",
    "Resource Management",
    "Character Progression",
    "Story Choices",
    "Time Pressure",
    "Collection",
    "Stealth",
    "Multiplayer",
    "Turn-Based",
    "Real-Time",
    "Physics-Based",
    "Procedural Generation",
)

GENRE_COUNT = len(GENRES)
MECHANIC_COUNT = len(MECHANICS)

# Alternate spellings seen in catalog records
_GENRE_ALIASES: Dict[str, str] = {
    "role-playing": "RPG",
    "role playing": "RPG",
    "roleplaying": "RPG",
    "platformer": "Platform",
    "shoot 'em up": "Shooter",
    "sim": "Simulation",
}

_GENRE_INDEX: Dict[str, int] = {g.lower(): i for i, g in enumerate(GENRES)}
_GENRE_INDEX.update({alias: _GENRE_INDEX[g.lower()] for alias, g in _GENRE_ALIASES.items()})

_MECHANIC_INDEX: Dict[str, int] = {m.lower(): i for i, m in enumerate(MECHANICS)}


class Genre:
    """Integer indices for the genres referenced by rule tables."""

    ACTION = _GENRE_INDEX["action"]
    ADVENTURE = _GENRE_INDEX["adventure"]
    RPG = _GENRE_INDEX["rpg"]
    STRATEGY = _GENRE_INDEX["strategy"]
    PUZZLE = _GENRE_INDEX["puzzle"]
    PLATFORM = _GENRE_INDEX["platform"]
    SHOOTER = _GENRE_INDEX["shooter"]
    FIGHTING = _GENRE_INDEX["fighting"]
    RACING = _GENRE_INDEX["racing"]
    SPORTS = _GENRE_INDEX["sports"]
    SIMULATION = _GENRE_INDEX["simulation"]
    HORROR = _GENRE_INDEX["horror"]


class Mechanic:
    """Integer indices for the mechanics referenced by rule tables."""

    COMBAT = _MECHANIC_INDEX["combat"]
    EXPLORATION = _MECHANIC_INDEX["exploration"]
    PUZZLE_SOLVING = _MECHANIC_INDEX["puzzle solving"]
    PLATFORM_JUMPING = _MECHANIC_INDEX["platform jumping"]
    RESOURCE_MANAGEMENT = _MECHANIC_INDEX["resource management"]
    CHARACTER_PROGRESSION = _MECHANIC_INDEX["character progression"]
    STORY_CHOICES = _MECHANIC_INDEX["story choices"]
    TIME_PRESSURE = _MECHANIC_INDEX["time pressure"]
    COLLECTION = _MECHANIC_INDEX["collection"]
    STEALTH = _MECHANIC_INDEX["stealth"]
    MULTIPLAYER = _MECHANIC_INDEX["multiplayer"]
    TURN_BASED = _MECHANIC_INDEX["turn-based"]
    REAL_TIME = _MECHANIC_INDEX["real-time"]
    PHYSICS_BASED = _MECHANIC_INDEX["physics-based"]
    PROCEDURAL_GENERATION = _MECHANIC_INDEX["procedural generation"]


def genre_index(label: Optional[str]) -> Optional[int]:
    """Taxonomy index for a genre label (case-insensitive, aliases allowed), or None."""
    if not label:
        return None
    return _GENRE_INDEX.get(label.strip().lower())


def mechanic_index(label: Optional[str]) -> Optional[int]:
    """Taxonomy index for a mechanic label, or None."""
    if not label:
        return None
    return _MECHANIC_INDEX.get(label.strip().lower())


def normalize_tag(tag: str) -> str:
    """Canonical form for free-text tags: 'Character Progression' -> 'character_progression'."""
    return re.sub(r"[\s\-]+", "_", tag.strip().lower())


# -----------------------------------------------------------------------------
# Eras
# -----------------------------------------------------------------------------


class Era(str, Enum):
    ARCADE_GOLDEN_AGE = "arcade_golden_age"
    EARLY_CONSOLE = "early_console"
    LATE_8BIT_EARLY_16BIT = "late_8bit_early_16bit"
    PEAK_16BIT = "peak_16bit"

    @property
    def year_range(self) -> Tuple[int, int]:
        return _ERA_RANGES[self]

    @property
    def display_name(self) -> str:
        return _ERA_NAMES[self]

    @property
    def description(self) -> str:
        return _ERA_DESCRIPTIONS[self]

    def contains(self, year: int) -> bool:
        start, end = self.year_range
        return start <= year <= end


_ERA_RANGES = {
    Era.ARCADE_GOLDEN_AGE: (1980, 1983),
    Era.EARLY_CONSOLE: (1984, 1987),
    Era.LATE_8BIT_EARLY_16BIT: (1988, 1991),
    Era.PEAK_16BIT: (1992, 1995),
}

_ERA_NAMES = {
    Era.ARCADE_GOLDEN_AGE: "Arcade Golden Age",
    Era.EARLY_CONSOLE: "Early Console Era",
    Era.LATE_8BIT_EARLY_16BIT: "Late 8-bit / Early 16-bit",
    Era.PEAK_16BIT: "Peak 16-bit Era",
}

_ERA_DESCRIPTIONS = {
    Era.ARCADE_GOLDEN_AGE: (
        "Simple, focused gameplay with emerging genres. "
        "Technical constraints led to creative solutions."
    ),
    Era.EARLY_CONSOLE: (
        "Home consoles arrive and genres solidify. RPGs and action-adventures emerge."
    ),
    Era.LATE_8BIT_EARLY_16BIT: (
        "Refined 8-bit masterpieces meet early 16-bit innovation."
    ),
    Era.PEAK_16BIT: (
        "Genre perfection with 2D art at its finest. The golden age of sprite-based games."
    ),
}


def era_for_year(year: int) -> Optional[Era]:
    """Era containing the given year, or None outside 1980-1995."""
    for era in Era:
        if era.contains(year):
            return era
    return None


UNKNOWN_ERA_CATEGORY = "unknown"

# (first_year, last_year, label); finer-grained than Era, used for annotation
_ERA_CATEGORIES: Tuple[Tuple[int, int, str], ...] = (
    (1980, 1983, "early_80s"),
    (1984, 1986, "mid_80s"),
    (1987, 1989, "late_80s"),
    (1990, 1992, "early_90s"),
    (1993, 1995, "mid_90s"),
)


def era_category(year: int) -> str:
    """Bucket label for a release year ("early_80s", ..., or "unknown")."""
    for start, end, label in _ERA_CATEGORIES:
        if start <= year <= end:
            return label
    return UNKNOWN_ERA_CATEGORY
