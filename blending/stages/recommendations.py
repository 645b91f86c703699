"""
Recommendation generator — suggested design features for a blended selection.

Pure lookup tables. Output order: genre rules (table order), mechanic rules,
complexity rules, co-occurrence rules. Identical strings produced by two rules
are kept once (first occurrence).
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from blending.models.game import GameMetadata
from blending.models.taxonomy import GENRES, Genre, genre_index, normalize_tag

GENRE_THRESHOLD = 0.3
HIGH_COMPLEXITY = 0.7
LOW_COMPLEXITY = 0.3

GENRE_FEATURES: Tuple[Tuple[int, Tuple[str, ...]], ...] = (
    (Genre.RPG, ("Character customization system", "Quest system with branching paths")),
    (Genre.ACTION, ("Responsive combat with combo system", "Boss battles with pattern learning")),
    (Genre.STRATEGY, ("Resource management layer", "Strategic planning phases")),
    (Genre.PUZZLE, ("Environmental puzzles integrated into levels",)),
    (Genre.ADVENTURE, ("Hidden areas and secrets to discover", "Dialogue-driven storytelling")),
    (Genre.PLATFORM, ("Precision movement with tight jump physics",)),
    (Genre.SHOOTER, ("Weapon upgrade progression",)),
    (Genre.RACING, ("Time trial mode with ghost replays",)),
    (Genre.SPORTS, ("Local head-to-head competition",)),
)

MECHANIC_FEATURES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("exploration", ("Hidden areas and secrets to discover", "Metroidvania-style ability gating")),
    ("character_progression", ("Skill trees or ability unlocks", "Experience point system")),
    ("high_score_chase", ("Score multiplier system", "Online leaderboards")),
    ("collection", ("Collectible tracker with completion rewards",)),
    ("stealth", ("Detection meters and alternate routes",)),
    ("multiplayer", ("Drop-in cooperative play",)),
)

HIGH_COMPLEXITY_FEATURES = (
    "In-depth tutorial system",
    "Codex or journal for tracking information",
    "Hint system for stuck players",
)
LOW_COMPLEXITY_FEATURES = (
    "Pick-up-and-play design",
    "Visual feedback over text explanations",
    "Intuitive controls",
)

ACTION_TAGS = frozenset({"combat", "real_time", "real_time_combat", "reflexes"})
STRATEGY_TAGS = frozenset({"turn_based", "tactical_planning", "resource_management"})
HYBRID_MODE_FEATURE = "Pause-and-plan tactical mode bridging real-time action and strategy"


def _weights_by_index(genre_weights: Mapping[str, float]) -> Dict[int, float]:
    """Resolve genre labels to taxonomy indices, summing aliases of one genre."""
    by_index: Dict[int, float] = {}
    for label, weight in genre_weights.items():
        idx = genre_index(label)
        if idx is not None:
            by_index[idx] = by_index.get(idx, 0.0) + weight
    return by_index


def recommend(
    genre_weights: Mapping[str, float],
    mechanic_tags: Iterable[str],
    complexity: float,
) -> List[str]:
    """Feature suggestions for aggregated genre weights, mechanic tags, and mean complexity."""
    suggestions: List[str] = []

    by_index = _weights_by_index(genre_weights)
    for idx, features in GENRE_FEATURES:
        if by_index.get(idx, 0.0) > GENRE_THRESHOLD:
            suggestions.extend(features)

    tags = {normalize_tag(t) for t in mechanic_tags}
    for tag, features in MECHANIC_FEATURES:
        if tag in tags:
            suggestions.extend(features)

    if complexity > HIGH_COMPLEXITY:
        suggestions.extend(HIGH_COMPLEXITY_FEATURES)
    elif complexity < LOW_COMPLEXITY:
        suggestions.extend(LOW_COMPLEXITY_FEATURES)

    if tags & ACTION_TAGS and tags & STRATEGY_TAGS:
        suggestions.append(HYBRID_MODE_FEATURE)

    return list(dict.fromkeys(suggestions))


# -----------------------------------------------------------------------------
# Aggregation over a selection
# -----------------------------------------------------------------------------


def aggregate_genre_weights(games: Sequence[GameMetadata]) -> Dict[str, float]:
    """
    Sum genre affinities across games and normalize to 1.0.

    A game without affinities contributes 1.0 to its primary genre.
    Labels of known genres are reported with their taxonomy spelling.
    """
    totals: Dict[str, float] = {}
    for game in games:
        affinities = game.genre_affinities or ({game.genre: 1.0} if game.genre else {})
        for label, weight in affinities.items():
            idx = genre_index(label)
            key = GENRES[idx] if idx is not None else label
            totals[key] = totals.get(key, 0.0) + weight
    total = sum(totals.values())
    if total <= 0:
        return {}
    return {label: weight / total for label, weight in totals.items()}


def aggregate_mechanic_tags(games: Sequence[GameMetadata]) -> List[str]:
    """Union of mechanic tags in first-seen order."""
    return list(dict.fromkeys(tag for game in games for tag in game.mechanic_tags))


def average_complexity(games: Sequence[GameMetadata]) -> float:
    if not games:
        return 0.0
    return sum(g.complexity for g in games) / len(games)


def recommend_for_games(games: Sequence[GameMetadata]) -> List[str]:
    """recommend() over the aggregated attributes of the given games."""
    if not games:
        return []
    return recommend(
        aggregate_genre_weights(games),
        aggregate_mechanic_tags(games),
        average_complexity(games),
    )
