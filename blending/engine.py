"""
Game Blending Engine

Thin facade over the modular pipeline:
- similarity / edge: pairwise compatibility and its annotations
- neighbors: ranked top-K over the catalog graph (built lazily)
- resolve_blend: maximum-compatibility spanning tree over a selection
- recommend_features / blend: derived feature suggestions and the full result

All implementation lives in models/, utils/, and stages/.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from blending.computed_params import compute_parameters
from blending.models.config import BlendingConfig, resolve_config
from blending.models.errors import UnknownGame
from blending.models.game import Catalog, GameMetadata, ensure_catalog
from blending.models.results import BlendPath, BlendResult, CompatibilityEdge
from blending.services.catalog_loader import CatalogLoader
from blending.settings import EngineSettings, get_settings
from blending.stages.annotator import analyze_edge
from blending.stages.graph_builder import CatalogGraph, Neighbor, build_catalog_graph
from blending.stages.recommendations import recommend_for_games
from blending.stages.resolver import normalize_selection, resolve_blend
from blending.stages.similarity import game_similarity
from blending.stages.summary import build_blend_result

logger = logging.getLogger(__name__)

CatalogInput = Union[Mapping[str, Union[Dict[str, Any], GameMetadata]], List[Union[Dict[str, Any], GameMetadata]]]


class BlendingEngine:
    """
    Compatibility queries and blend resolution over one read-only catalog.

    The catalog graph is built on first use (or supplied prebuilt) and then
    reused for neighbor queries and resolver weight lookups.
    """

    def __init__(
        self,
        catalog: CatalogInput,
        config: Optional[BlendingConfig] = None,
        graph: Optional[CatalogGraph] = None,
    ):
        self.catalog: Catalog = ensure_catalog(catalog)
        self.config = resolve_config(config)
        if graph is not None:
            missing, extra = graph.node_mismatch(self.catalog)
            if missing or extra:
                logger.warning(
                    "[engine] GRAPH_CATALOG_MISMATCH missing=%s extra=%s; rebuilding on first use",
                    missing[:5], extra[:5],
                )
                graph = None
        self._graph = graph

    @classmethod
    def from_settings(cls, settings: Optional[EngineSettings] = None) -> "BlendingEngine":
        """
        Engine over the catalog named by environment settings.

        Loads settings.catalog_name from settings.catalogs_dir (with its
        persisted graph, if any) and applies settings.blending_config().
        """
        settings = settings or get_settings()
        if settings.catalog_name is None:
            raise ValueError("CATALOG_NAME is not set")
        loaded = CatalogLoader(settings.catalogs_dir).load_catalog(settings.catalog_name)
        return cls(loaded.catalog, settings.blending_config(), loaded.graph)

    def _game(self, game_id: str) -> GameMetadata:
        game = self.catalog.get(game_id)
        if game is None:
            raise UnknownGame(game_id)
        return game

    def _games(self, game_ids: Iterable[str]) -> List[GameMetadata]:
        return [self._game(game_id) for game_id in normalize_selection(game_ids)]

    # -------------------------------------------------------------------------
    # Graph
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> Optional[CatalogGraph]:
        """The catalog graph if it has been built or supplied, else None."""
        return self._graph

    def build_graph(self, rebuild: bool = False) -> CatalogGraph:
        """Build (or return the already built) catalog-wide similarity graph."""
        if self._graph is None or rebuild:
            self._graph = build_catalog_graph(self.catalog, self.config)
        return self._graph

    # -------------------------------------------------------------------------
    # Pairwise queries
    # -------------------------------------------------------------------------

    def similarity(self, id_a: str, id_b: str) -> float:
        return game_similarity(self._game(id_a), self._game(id_b), self.config)

    def edge(self, id_a: str, id_b: str) -> CompatibilityEdge:
        """Compatibility edge (weight, synergies, conflicts) for one pair."""
        return analyze_edge(self._game(id_a), self._game(id_b), self.config)

    def neighbors(self, game_id: str, k: Optional[int] = None) -> List[Neighbor]:
        """
        Ranked (id, weight) neighbors of game_id, descending by weight.

        k defaults to config.neighbor_k. Only pairs above config.edge_floor
        are neighbors.
        """
        self._game(game_id)
        if k is None:
            k = self.config.neighbor_k
        return self.build_graph().neighbors(game_id, k)

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    def resolve_blend(self, game_ids: Iterable[str]) -> BlendPath:
        return resolve_blend(game_ids, self.catalog, self.config, self._graph)

    def recommend_features(self, game_ids: Iterable[str]) -> List[str]:
        """Feature suggestions for the selection (empty selection gives no suggestions)."""
        return recommend_for_games(self._games(game_ids))

    def blend(self, game_ids: Sequence[str]) -> BlendResult:
        """Resolve the selection and summarize it as a full BlendResult."""
        blend_path = self.resolve_blend(game_ids)
        games = [self.catalog[game_id] for game_id in blend_path.games]
        result = build_blend_result(games, blend_path)
        logger.info(
            "[engine] BLEND name=%r games=%s total=%.4f synergies=%s conflicts=%s",
            result.name, len(games), blend_path.total_compatibility,
            len(blend_path.synergies), len(blend_path.conflicts),
        )
        return result

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def parameters(self) -> Dict[str, Any]:
        """Base config values plus the derived parameters computed from them."""
        base = self.config.model_dump()
        return {"base": base, "computed": compute_parameters(base)}
