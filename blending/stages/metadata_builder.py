"""
Metadata builder — raw catalog records to GameMetadata, plus offline enrichment.

Runs once at catalog-generation time. Genre labels are resolved to taxonomy
indices up front; every inference rule below is keyed by index.

Public API: build_game_metadata, build_catalog, enrich_metadata,
enrich_catalog, populate_common_pairings.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from blending.models.features import FeatureVector
from blending.models.game import Catalog, GameMetadata, GameRecord
from blending.models.taxonomy import (
    GENRE_COUNT,
    GENRES,
    MECHANIC_COUNT,
    MECHANICS,
    Genre,
    Mechanic,
    genre_index,
)

from .graph_builder import CatalogGraph

logger = logging.getLogger(__name__)

SECONDARY_GENRE_WEIGHT = 0.3

# Description keywords hinting at a secondary genre
_DESCRIPTION_GENRE_HINTS: Tuple[Tuple[str, int], ...] = (
    ("puzzle", Genre.PUZZLE),
    ("adventure", Genre.ADVENTURE),
    ("action", Genre.ACTION),
    ("strategy", Genre.STRATEGY),
)

_GENRE_MECHANICS: Dict[int, Tuple[int, ...]] = {
    Genre.ACTION: (Mechanic.COMBAT, Mechanic.REAL_TIME),
    Genre.SHOOTER: (Mechanic.COMBAT, Mechanic.REAL_TIME),
    Genre.FIGHTING: (Mechanic.COMBAT, Mechanic.REAL_TIME),
    Genre.RPG: (Mechanic.CHARACTER_PROGRESSION, Mechanic.EXPLORATION, Mechanic.STORY_CHOICES),
    Genre.ADVENTURE: (Mechanic.EXPLORATION, Mechanic.STORY_CHOICES),
    Genre.STRATEGY: (Mechanic.RESOURCE_MANAGEMENT, Mechanic.TURN_BASED),
    Genre.SIMULATION: (Mechanic.RESOURCE_MANAGEMENT,),
    Genre.PLATFORM: (Mechanic.PLATFORM_JUMPING, Mechanic.COLLECTION),
    Genre.PUZZLE: (Mechanic.PUZZLE_SOLVING,),
    Genre.RACING: (Mechanic.REAL_TIME, Mechanic.TIME_PRESSURE),
    Genre.HORROR: (Mechanic.EXPLORATION, Mechanic.STEALTH),
}

# Checked in order; "SNES" must precede "NES"
_PLATFORM_GENERATIONS: Tuple[Tuple[str, int], ...] = (
    ("Arcade", 1),
    ("Atari 2600", 1),
    ("SNES", 3),
    ("Super NES", 3),
    ("Super Nintendo", 3),
    ("Genesis", 3),
    ("Mega Drive", 3),
    ("TurboGrafx", 3),
    ("NES", 2),
    ("Master System", 2),
    ("Game Boy", 2),
    ("PlayStation", 4),
    ("Saturn", 4),
    ("Nintendo 64", 5),
)

_GENRE_COMPLEXITY: Dict[int, float] = {
    Genre.STRATEGY: 0.8,
    Genre.RPG: 0.8,
    Genre.SIMULATION: 0.8,
    Genre.ADVENTURE: 0.6,
    Genre.FIGHTING: 0.6,
    Genre.ACTION: 0.4,
    Genre.PLATFORM: 0.4,
    Genre.SHOOTER: 0.4,
    Genre.PUZZLE: 0.3,
    Genre.SPORTS: 0.3,
}
DEFAULT_COMPLEXITY = 0.5

# -1 = strategic, +1 = action
_GENRE_ACTION_BALANCE: Dict[int, float] = {
    Genre.ACTION: 0.8,
    Genre.SHOOTER: 0.8,
    Genre.PLATFORM: 0.6,
    Genre.RACING: 0.6,
    Genre.FIGHTING: 0.6,
    Genre.SPORTS: 0.4,
    Genre.ADVENTURE: 0.0,
    Genre.RPG: -0.2,
    Genre.PUZZLE: -0.4,
    Genre.SIMULATION: -0.6,
    Genre.STRATEGY: -0.8,
}

# -1 = single-player, +1 = multiplayer
_GENRE_MULTI_BALANCE: Dict[int, float] = {
    Genre.FIGHTING: 0.8,
    Genre.SPORTS: 0.8,
    Genre.RACING: 0.4,
    Genre.ACTION: -0.4,
    Genre.PLATFORM: -0.4,
    Genre.RPG: -0.8,
    Genre.ADVENTURE: -0.8,
    Genre.STRATEGY: -0.8,
}
DEFAULT_MULTI_BALANCE = -0.5
ARCADE_MULTI_BALANCE = 0.5

_GENRE_AFFINITIES: Dict[int, Tuple[Tuple[int, float], ...]] = {
    Genre.ACTION: ((Genre.PLATFORM, 0.5), (Genre.SHOOTER, 0.6)),
    Genre.RPG: ((Genre.ADVENTURE, 0.7), (Genre.STRATEGY, 0.4)),
    Genre.PLATFORM: ((Genre.ACTION, 0.6), (Genre.PUZZLE, 0.3)),
    Genre.STRATEGY: ((Genre.SIMULATION, 0.4),),
    Genre.ADVENTURE: ((Genre.RPG, 0.4), (Genre.PUZZLE, 0.3)),
}

_GENRE_MOODS: Dict[int, Tuple[str, ...]] = {
    Genre.ACTION: ("Fast-paced", "Intense"),
    Genre.RPG: ("Epic", "Immersive"),
    Genre.STRATEGY: ("Thoughtful", "Tactical"),
    Genre.PUZZLE: ("Relaxing", "Cerebral"),
    Genre.ADVENTURE: ("Exploratory", "Narrative"),
    Genre.PLATFORM: ("Cheerful", "Challenging"),
    Genre.SHOOTER: ("Adrenaline", "Competitive"),
    Genre.SPORTS: ("Competitive", "Energetic"),
    Genre.RACING: ("Thrilling", "Speed"),
    Genre.HORROR: ("Tense", "Atmospheric"),
}

ARCADE_ERA_LAST_YEAR = 1985
SAVE_SYSTEM_FIRST_YEAR = 1990


def _is_arcade(platforms: Sequence[str]) -> bool:
    return any("Arcade" in p for p in platforms)


def _genre_weights(primary: Optional[int], description: Optional[str]) -> Tuple[float, ...]:
    weights = [0.0] * GENRE_COUNT
    if primary is not None:
        weights[primary] = 1.0
    if description:
        text = description.lower()
        for keyword, idx in _DESCRIPTION_GENRE_HINTS:
            if keyword in text:
                weights[idx] = max(weights[idx], SECONDARY_GENRE_WEIGHT)
    total = sum(weights)
    if total > 0:
        weights = [w / total for w in weights]
    return tuple(weights)


def _mechanic_flags(primary: Optional[int], record: GameRecord) -> Tuple[bool, ...]:
    flags = [False] * MECHANIC_COUNT
    for idx in _GENRE_MECHANICS.get(primary, ()):
        flags[idx] = True
    if record.year <= ARCADE_ERA_LAST_YEAR:
        flags[Mechanic.TIME_PRESSURE] = True
    if _is_arcade(record.platforms):
        flags[Mechanic.MULTIPLAYER] = True
    if primary == Genre.RPG and record.year <= SAVE_SYSTEM_FIRST_YEAR:
        flags[Mechanic.TURN_BASED] = True
    if flags[Mechanic.TURN_BASED]:
        flags[Mechanic.REAL_TIME] = False
    return tuple(flags)


def _platform_generation(record: GameRecord) -> int:
    for platform in record.platforms:
        for keyword, generation in _PLATFORM_GENERATIONS:
            if keyword in platform:
                return generation
    year = record.year
    if year <= 1983:
        return 1
    if year <= 1987:
        return 2
    if year <= 1991:
        return 3
    if year <= 1995:
        return 4
    return 5


def _complexity(primary: Optional[int], year: int) -> float:
    base = _GENRE_COMPLEXITY.get(primary, DEFAULT_COMPLEXITY)
    # Games grew more complex over the period; adds at most 0.2
    era_modifier = max(0.0, min(0.2, (year - 1980) / 15.0 * 0.2))
    return min(1.0, base + era_modifier)


def _single_multi_balance(primary: Optional[int], platforms: Sequence[str]) -> float:
    balance = _GENRE_MULTI_BALANCE.get(primary, DEFAULT_MULTI_BALANCE)
    if _is_arcade(platforms):
        balance = max(balance, ARCADE_MULTI_BALANCE)
    return balance


def _mechanic_tags(flags: Sequence[bool], record: GameRecord) -> List[str]:
    tags = [MECHANICS[i] for i, flag in enumerate(flags) if flag]
    if record.year <= ARCADE_ERA_LAST_YEAR:
        tags.append("High Score Chase")
    elif record.year >= SAVE_SYSTEM_FIRST_YEAR:
        tags.append("Save System")
    if any("Game Boy" in p for p in record.platforms):
        tags.append("Portable Friendly")
    return tags


def _mood_tags(primary: Optional[int], year: int) -> List[str]:
    tags = list(_GENRE_MOODS.get(primary, ()))
    if year <= ARCADE_ERA_LAST_YEAR:
        tags.extend(["Arcade", "Retro"])
    elif year >= 1992:
        tags.append("16-bit Era")
    return tags


def _genre_affinities(primary: Optional[int], label: str) -> Dict[str, float]:
    if primary is None:
        return {label: 1.0} if label else {}
    affinities = {GENRES[primary]: 1.0}
    for idx, weight in _GENRE_AFFINITIES.get(primary, ()):
        affinities[GENRES[idx]] = weight
    return affinities


def build_game_metadata(record: Union[GameRecord, Dict[str, Any]]) -> GameMetadata:
    """Derive the feature vector and annotation tags for one raw record."""
    if isinstance(record, dict):
        record = GameRecord.model_validate(record)
    primary = genre_index(record.genre)
    if primary is None:
        logger.warning(
            "[metadata] UNKNOWN_GENRE game_id=%s genre=%r; genre weights left empty",
            record.id, record.genre,
        )

    flags = _mechanic_flags(primary, record)
    features = FeatureVector(
        genre_weights=_genre_weights(primary, record.description),
        mechanic_flags=flags,
        platform_generation=_platform_generation(record),
        complexity=_complexity(primary, record.year),
        action_strategy_balance=_GENRE_ACTION_BALANCE.get(primary, 0.0),
        single_multi_balance=_single_multi_balance(primary, record.platforms),
    )
    return GameMetadata.model_validate(
        {
            **record.model_dump(),
            "feature_vector": features,
            "mechanic_tags": _mechanic_tags(flags, record),
            "mood_tags": _mood_tags(primary, record.year),
            "genre_affinities": _genre_affinities(primary, record.genre),
        }
    )


def build_catalog(records: Iterable[Union[GameRecord, Dict[str, Any]]]) -> Catalog:
    """Build metadata for every record. Raises ValueError on duplicate ids."""
    catalog: Catalog = {}
    for record in records:
        meta = build_game_metadata(record)
        if meta.id in catalog:
            raise ValueError(f"Duplicate game id in catalog: {meta.id}")
        catalog[meta.id] = meta
    logger.info("[metadata] CATALOG_BUILT games=%s", len(catalog))
    return catalog


def enrich_metadata(
    meta: GameMetadata,
    embedding: Optional[Sequence[float]] = None,
    mechanics: Iterable[str] = (),
    moods: Iterable[str] = (),
    genre_blend: Optional[Mapping[str, float]] = None,
) -> GameMetadata:
    """
    New GameMetadata with externally supplied enrichment applied.

    The input is left untouched. Extra mechanic and mood tags are appended
    after the existing ones in first-seen order; genre_blend entries override
    matching affinities.
    """
    features = meta.feature_vector
    if embedding:
        features = features.with_embedding(embedding)
    mechanic_tags = list(meta.mechanic_tags) + [m for m in mechanics if m not in meta.mechanic_tags]
    mood_tags = list(meta.mood_tags) + [m for m in moods if m not in meta.mood_tags]
    affinities = dict(meta.genre_affinities)
    if genre_blend:
        affinities.update(genre_blend)
    return GameMetadata.model_validate(
        {
            **meta.model_dump(),
            "feature_vector": features,
            "mechanic_tags": mechanic_tags,
            "mood_tags": mood_tags,
            "genre_affinities": affinities,
        }
    )


def enrich_catalog(catalog: Catalog, embeddings: Mapping[str, Sequence[float]]) -> Catalog:
    """
    New catalog with semantic embeddings attached.

    Embeddings whose dimension differs from the first one seen are skipped
    with a warning; ids not in the catalog are ignored.
    """
    dimension: Optional[int] = None
    enriched: Catalog = {}
    for game_id, meta in catalog.items():
        embedding = embeddings.get(game_id)
        if embedding:
            if dimension is None:
                dimension = len(embedding)
            if len(embedding) != dimension:
                logger.warning(
                    "[metadata] EMBEDDING_DIM_MISMATCH game_id=%s expected=%s got=%s",
                    game_id, dimension, len(embedding),
                )
                embedding = None
        enriched[game_id] = enrich_metadata(meta, embedding=embedding) if embedding else meta
    return enriched


def populate_common_pairings(catalog: Catalog, graph: CatalogGraph) -> Catalog:
    """New catalog where each entry's common_pairings holds its top-K graph neighbors."""
    top = graph.top_neighbors()
    populated: Catalog = {}
    for game_id, meta in catalog.items():
        pairings = dict(top.get(game_id, []))
        populated[game_id] = meta.model_copy(update={"common_pairings": pairings})
    logger.info("[metadata] PAIRINGS_POPULATED games=%s k=%s", len(populated), graph.neighbor_k)
    return populated
