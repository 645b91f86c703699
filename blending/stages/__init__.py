"""Pipeline stages: similarity, catalog graph, blend resolution, annotation, recommendations."""

from .annotator import analyze_edge, annotate, suggest_resolution
from .graph_builder import CatalogGraph, build_catalog_graph, build_era_subgraph
from .metadata_builder import (
    build_catalog,
    build_game_metadata,
    enrich_catalog,
    enrich_metadata,
    populate_common_pairings,
)
from .recommendations import recommend, recommend_for_games
from .resolver import minimum_spanning_tree, resolve_blend
from .similarity import game_similarity, similarity, sub_scores
from .summary import build_blend_result

__all__ = [
    "CatalogGraph",
    "analyze_edge",
    "annotate",
    "build_blend_result",
    "build_catalog",
    "build_catalog_graph",
    "build_era_subgraph",
    "build_game_metadata",
    "enrich_catalog",
    "enrich_metadata",
    "game_similarity",
    "minimum_spanning_tree",
    "populate_common_pairings",
    "recommend",
    "recommend_for_games",
    "resolve_blend",
    "similarity",
    "sub_scores",
    "suggest_resolution",
]
