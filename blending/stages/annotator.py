"""
Synergy/conflict annotator — rule table comparing two catalog entries.

Rules are evaluated independently; several may fire for one pair.
Output order is fixed: synergies (era, platform, mechanic, complexity),
then conflicts (complexity, pacing, era gap, genre).
"""

from typing import List, Optional, Tuple

from blending.models.config import BlendingConfig, DEFAULT_CONFIG
from blending.models.game import GameMetadata
from blending.models.results import CompatibilityEdge, Conflict, Synergy
from blending.models.taxonomy import GENRES, UNKNOWN_ERA_CATEGORY, Genre

from .similarity import game_similarity

# Synergy thresholds and strengths
ERA_CATEGORY_STRENGTH = 0.8
ERA_YEAR_WINDOW = 2
ERA_YEAR_STRENGTH = 0.6
PLATFORM_STRENGTH = 0.5
MECHANIC_STRENGTH = 0.6
COMPLEXITY_MATCH_BELOW = 0.2
COMPLEXITY_MATCH_STRENGTH = 0.7

# Conflict thresholds and severities
COMPLEXITY_MISMATCH_ABOVE = 0.5
STYLE_CONFLICT_ABOVE = 1.0
ERA_GAP_YEARS = 10
ERA_GAP_SEVERITY = 0.4
GENRE_CONFLICT_SEVERITY = 0.6

# Genre pairs with clashing player expectations (unordered)
ANTAGONISTIC_GENRES = frozenset(
    frozenset(pair)
    for pair in (
        (Genre.ACTION, Genre.STRATEGY),
        (Genre.PUZZLE, Genre.ACTION),
        (Genre.RACING, Genre.RPG),
    )
)

# Keyword -> resolution hint, first match wins. Conflict rules take their
# hint from this table via suggest_resolution(description).
RESOLUTION_HINTS: Tuple[Tuple[str, str], ...] = (
    ("complex", "Implement difficulty modes or a gradual complexity ramp"),
    ("pace", "Create a hybrid mode or a pause-and-plan layer over real-time play"),
    ("action vs strategy", "Create a hybrid mode or a pause-and-plan layer over real-time play"),
    ("era", "Use modern quality-of-life features while preserving the era's feel"),
    ("expectations", "Clearly communicate the genre blend in any description"),
)
DEFAULT_RESOLUTION_HINT = "Balance conflicting elements through player choice"


def _era_synergy(a: GameMetadata, b: GameMetadata) -> Optional[Synergy]:
    """At most one era synergy; a shared era bucket wins over year proximity."""
    if a.era_category and a.era_category == b.era_category and a.era_category != UNKNOWN_ERA_CATEGORY:
        return Synergy(
            type_name="Era Match",
            description=f"Both games are from the {a.era_category.replace('_', ' ')}",
            strength=ERA_CATEGORY_STRENGTH,
        )
    if abs(a.year - b.year) <= ERA_YEAR_WINDOW:
        return Synergy(
            type_name="Era Match",
            description="Games from a similar era share technical constraints",
            strength=ERA_YEAR_STRENGTH,
        )
    return None


def _platform_synergy(a: GameMetadata, b: GameMetadata) -> Optional[Synergy]:
    shared = [p for p in a.platforms if p in b.platforms]
    if not shared:
        return None
    return Synergy(
        type_name="Platform Match",
        description=f"Both released on: {', '.join(shared)}",
        strength=PLATFORM_STRENGTH,
    )


def _mechanic_synergy(a: GameMetadata, b: GameMetadata) -> Optional[Synergy]:
    shared = [tag for tag in a.mechanic_tags if tag in b.mechanic_tags]
    if not shared:
        return None
    return Synergy(
        type_name="Mechanic Overlap",
        description=f"Both games feature {', '.join(shared)}",
        strength=MECHANIC_STRENGTH,
    )


def _complexity_synergy(a: GameMetadata, b: GameMetadata) -> Optional[Synergy]:
    if abs(a.complexity - b.complexity) >= COMPLEXITY_MATCH_BELOW:
        return None
    return Synergy(
        type_name="Complexity Match",
        description="Similar complexity levels ensure a consistent experience",
        strength=COMPLEXITY_MATCH_STRENGTH,
    )


def _conflict(type_name: str, description: str, severity: float) -> Conflict:
    return Conflict(
        type_name=type_name,
        description=description,
        severity=severity,
        resolution_hint=suggest_resolution(description),
    )


def _complexity_conflict(a: GameMetadata, b: GameMetadata) -> Optional[Conflict]:
    diff = abs(a.complexity - b.complexity)
    if diff <= COMPLEXITY_MISMATCH_ABOVE:
        return None
    more, less = (a, b) if a.complexity > b.complexity else (b, a)
    # "complex" precedes any keyword a game name could contain
    return _conflict(
        "Complexity Mismatch",
        f"{more.name} is much more complex than {less.name}",
        diff,
    )


def _style_conflict(a: GameMetadata, b: GameMetadata) -> Optional[Conflict]:
    diff = abs(a.action_strategy_balance - b.action_strategy_balance)
    if diff <= STYLE_CONFLICT_ABOVE:
        return None
    return _conflict(
        "Gameplay Style Conflict",
        "Conflicting pace: action vs strategy focus",
        diff / 2.0,
    )


def _era_gap_conflict(a: GameMetadata, b: GameMetadata) -> Optional[Conflict]:
    if abs(a.year - b.year) <= ERA_GAP_YEARS:
        return None
    return _conflict(
        "Era Gap",
        "Large era gap may create inconsistent expectations",
        ERA_GAP_SEVERITY,
    )


def _genre_conflict(a: GameMetadata, b: GameMetadata) -> Optional[Conflict]:
    if a.genre_index is None or b.genre_index is None:
        return None
    if frozenset((a.genre_index, b.genre_index)) not in ANTAGONISTIC_GENRES:
        return None
    return _conflict(
        "Genre Conflict",
        f"{GENRES[a.genre_index]} and {GENRES[b.genre_index]} have very different player expectations",
        GENRE_CONFLICT_SEVERITY,
    )


_SYNERGY_RULES = (_era_synergy, _platform_synergy, _mechanic_synergy, _complexity_synergy)
_CONFLICT_RULES = (_complexity_conflict, _style_conflict, _era_gap_conflict, _genre_conflict)


def annotate(
    game_a: GameMetadata,
    game_b: GameMetadata,
) -> Tuple[List[Synergy], List[Conflict]]:
    """Synergies and conflicts for one pair, in rule-table order."""
    synergies = [s for s in (rule(game_a, game_b) for rule in _SYNERGY_RULES) if s is not None]
    conflicts = [c for c in (rule(game_a, game_b) for rule in _CONFLICT_RULES) if c is not None]
    return synergies, conflicts


def analyze_edge(
    game_a: GameMetadata,
    game_b: GameMetadata,
    config: BlendingConfig = DEFAULT_CONFIG,
    weight: Optional[float] = None,
) -> CompatibilityEdge:
    """
    Full compatibility edge for a pair.

    weight defaults to the similarity engine's score; the resolver passes the
    weight it already used so the edge matches the tree it belongs to.
    """
    if weight is None:
        weight = game_similarity(game_a, game_b, config)
    synergies, conflicts = annotate(game_a, game_b)
    return CompatibilityEdge(
        game_ids=(game_a.id, game_b.id),
        weight=weight,
        synergies=synergies,
        conflicts=conflicts,
    )


def suggest_resolution(conflict: str) -> str:
    """Resolution hint for a free-text conflict description (keyword match)."""
    text = conflict.lower()
    for keyword, hint in RESOLUTION_HINTS:
        if keyword in text:
            return hint
    return DEFAULT_RESOLUTION_HINT
