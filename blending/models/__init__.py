"""Data models for the blending engine."""

from .config import DEFAULT_CONFIG, BlendingConfig, resolve_config
from .errors import BlendingError, InsufficientSelection, UnknownGame
from .features import MAX_PLATFORM_GENERATION, FeatureVector
from .game import Catalog, GameMetadata, GameRecord, ensure_catalog
from .results import BlendPath, BlendResult, CompatibilityEdge, Conflict, Synergy
from .taxonomy import (
    GENRES,
    MECHANICS,
    Era,
    Genre,
    Mechanic,
    era_category,
    era_for_year,
    genre_index,
    mechanic_index,
)

__all__ = [
    "DEFAULT_CONFIG",
    "BlendingConfig",
    "BlendingError",
    "BlendPath",
    "BlendResult",
    "Catalog",
    "CompatibilityEdge",
    "Conflict",
    "Era",
    "FeatureVector",
    "GENRES",
    "GameMetadata",
    "GameRecord",
    "Genre",
    "InsufficientSelection",
    "MAX_PLATFORM_GENERATION",
    "MECHANICS",
    "Mechanic",
    "Synergy",
    "UnknownGame",
    "ensure_catalog",
    "era_category",
    "era_for_year",
    "genre_index",
    "mechanic_index",
    "resolve_config",
]
