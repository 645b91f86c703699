"""
Game Blending Engine — catalog compatibility graph and blend resolution

Single entry point for the blending package:
- models/: BlendingConfig, FeatureVector, GameMetadata, result models, taxonomy
- stages/: similarity, graph_builder, resolver, annotator, recommendations, summary
- services/: CatalogLoader for on-disk catalogs
- settings: EngineSettings from environment / .env
- engine: BlendingEngine facade over the stages
"""

from blending.computed_params import compute_parameters
from blending.engine import BlendingEngine
from blending.models.config import DEFAULT_CONFIG, BlendingConfig, resolve_config
from blending.models.errors import BlendingError, InsufficientSelection, UnknownGame
from blending.models.features import FeatureVector
from blending.models.game import Catalog, GameMetadata, GameRecord, ensure_catalog
from blending.models.results import BlendPath, BlendResult, CompatibilityEdge, Conflict, Synergy
from blending.services.catalog_loader import CatalogLoader
from blending.settings import EngineSettings, get_settings
from blending.stages.annotator import analyze_edge, annotate
from blending.stages.graph_builder import CatalogGraph, build_catalog_graph
from blending.stages.metadata_builder import build_catalog, build_game_metadata
from blending.stages.recommendations import recommend
from blending.stages.resolver import resolve_blend
from blending.stages.similarity import game_similarity, similarity

__all__ = [
    "BlendingConfig",
    "BlendingEngine",
    "BlendingError",
    "BlendPath",
    "BlendResult",
    "Catalog",
    "CatalogGraph",
    "CatalogLoader",
    "CompatibilityEdge",
    "Conflict",
    "DEFAULT_CONFIG",
    "EngineSettings",
    "FeatureVector",
    "GameMetadata",
    "GameRecord",
    "InsufficientSelection",
    "Synergy",
    "UnknownGame",
    "analyze_edge",
    "annotate",
    "build_catalog",
    "build_catalog_graph",
    "build_game_metadata",
    "compute_parameters",
    "ensure_catalog",
    "game_similarity",
    "get_settings",
    "recommend",
    "resolve_blend",
    "resolve_config",
    "similarity",
]
