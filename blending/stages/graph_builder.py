"""
Catalog graph builder — all-pairs similarity graph and per-item top-K neighbors.

Builds a sparse undirected graph with an edge for every pair whose similarity
is strictly above config.edge_floor, then ranks each item's neighbors by
descending weight (ties by ascending id).

The O(N²) pair scoring is a data-parallel batch: rows of the upper triangle
are dealt round-robin to workers, each worker reads only immutable feature
vectors and returns its own (i, j, weight) list, and the calling thread merges
the results once all workers are done.

The public entry points are build_catalog_graph and build_era_subgraph.
"""

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from blending.models.config import BlendingConfig, resolve_config
from blending.models.errors import UnknownGame
from blending.models.features import FeatureVector
from blending.models.game import Catalog
from blending.models.taxonomy import Era

from .similarity import similarity

logger = logging.getLogger(__name__)

Neighbor = Tuple[str, float]
WeightedPair = Tuple[int, int, float]


def rank_neighbors(adjacent: Dict[str, float], k: Optional[int] = None) -> List[Neighbor]:
    """Sort (id, weight) pairs by descending weight, ties by ascending id; truncate to k."""
    ranked = sorted(adjacent.items(), key=lambda item: (-item[1], item[0]))
    return ranked if k is None else ranked[:k]


class CatalogGraph:
    """
    Undirected weighted graph over catalog ids.

    Nodes are kept in insertion order; adjacency is a dict-of-dicts so that
    weight lookups and per-node neighbor scans are O(1) / O(degree).
    """

    def __init__(self, neighbor_k: int = 10):
        self.neighbor_k = neighbor_k
        self._nodes: List[str] = []
        self._adjacency: Dict[str, Dict[str, float]] = {}
        self._top_k: Dict[str, List[Neighbor]] = {}

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_node(self, game_id: str) -> None:
        if game_id not in self._adjacency:
            self._nodes.append(game_id)
            self._adjacency[game_id] = {}

    def add_edge(self, id_a: str, id_b: str, weight: float) -> None:
        if id_a == id_b:
            raise ValueError(f"Self-loop not allowed: {id_a}")
        self.add_node(id_a)
        self.add_node(id_b)
        self._adjacency[id_a][id_b] = weight
        self._adjacency[id_b][id_a] = weight
        self._top_k.pop(id_a, None)
        self._top_k.pop(id_b, None)

    def precompute_neighbors(self) -> None:
        """Rank and store every node's top-K neighbor list."""
        self._top_k = {
            node: rank_neighbors(self._adjacency[node], self.neighbor_k)
            for node in self._nodes
        }

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> List[str]:
        return list(self._nodes)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(adj) for adj in self._adjacency.values()) // 2

    def has_node(self, game_id: str) -> bool:
        return game_id in self._adjacency

    def node_mismatch(self, game_ids: Iterable[str]) -> Tuple[List[str], List[str]]:
        """
        Compare graph nodes against a catalog's ids.

        Returns (missing, extra): catalog ids with no node, and nodes the
        catalog does not hold. Both empty means the graph covers the catalog.
        """
        ids = list(game_ids)
        id_set = set(ids)
        missing = [game_id for game_id in ids if game_id not in self._adjacency]
        extra = [node for node in self._nodes if node not in id_set]
        return missing, extra

    def weight(self, id_a: str, id_b: str) -> Optional[float]:
        """Edge weight, or None when the pair has no edge (at or below the floor)."""
        adjacent = self._adjacency.get(id_a)
        if adjacent is None:
            return None
        return adjacent.get(id_b)

    def edges(self) -> List[Tuple[str, str, float]]:
        """Each undirected edge once, as (id_a, id_b, weight) with id_a added first."""
        order = {node: i for i, node in enumerate(self._nodes)}
        return [
            (a, b, w)
            for a in self._nodes
            for b, w in self._adjacency[a].items()
            if order[a] < order[b]
        ]

    def neighbors(self, game_id: str, k: Optional[int] = None) -> List[Neighbor]:
        """
        Neighbors of game_id sorted by descending weight (ties by id), at most k.

        Uses the precomputed top-K list when it covers k; otherwise ranks the
        full adjacency. Never includes game_id itself.
        """
        if game_id not in self._adjacency:
            raise UnknownGame(game_id)
        k = self.neighbor_k if k is None else k
        if k <= 0:
            return []
        cached = self._top_k.get(game_id)
        if cached is not None and k <= self.neighbor_k:
            return cached[:k]
        return rank_neighbors(self._adjacency[game_id], k)

    def top_neighbors(self) -> Dict[str, List[Neighbor]]:
        """Top-K neighbor lists for every node (computed on first use)."""
        if len(self._top_k) != len(self._nodes):
            self.precompute_neighbors()
        return {node: list(ranked) for node, ranked in self._top_k.items()}

    def subgraph(self, game_ids: Iterable[str]) -> "CatalogGraph":
        """Induced subgraph over the given ids (unknown ids raise UnknownGame)."""
        sub = CatalogGraph(neighbor_k=self.neighbor_k)
        keep = []
        for game_id in game_ids:
            if game_id not in self._adjacency:
                raise UnknownGame(game_id)
            sub.add_node(game_id)
            keep.append(game_id)
        kept = set(keep)
        for a, b, w in self.edges():
            if a in kept and b in kept:
                sub.add_edge(a, b, w)
        sub.precompute_neighbors()
        return sub

    def stats(self, hub_count: int = 5) -> Dict[str, Any]:
        """Node/edge counts, mean edge weight, and the most-connected ids."""
        weights = [w for _, _, w in self.edges()]
        average = sum(weights) / len(weights) if weights else 0.0
        degrees = sorted(
            ((node, len(self._adjacency[node])) for node in self._nodes),
            key=lambda item: (-item[1], item[0]),
        )
        return {
            "node_count": self.node_count,
            "edge_count": len(weights),
            "average_similarity": average,
            "top_hubs": [
                {"id": node, "connections": degree} for node, degree in degrees[:hub_count]
            ],
        }

    # -------------------------------------------------------------------------
    # Serialization (opaque form persisted by the storage layer)
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "neighbor_k": self.neighbor_k,
            "nodes": list(self._nodes),
            "edges": [
                {"game1_id": a, "game2_id": b, "similarity": w} for a, b, w in self.edges()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogGraph":
        graph = cls(neighbor_k=data.get("neighbor_k", 10))
        for node in data.get("nodes", []):
            graph.add_node(str(node))
        for edge in data.get("edges", []):
            graph.add_edge(str(edge["game1_id"]), str(edge["game2_id"]), float(edge["similarity"]))
        graph.precompute_neighbors()
        return graph


def _score_rows(
    rows: Sequence[int],
    vectors: Sequence[FeatureVector],
    config: BlendingConfig,
) -> List[WeightedPair]:
    """Score pairs (i, j) for j > i over the given rows; keep those above the floor."""
    out: List[WeightedPair] = []
    n = len(vectors)
    for i in rows:
        vi = vectors[i]
        for j in range(i + 1, n):
            w = similarity(vi, vectors[j], config)
            if w > config.edge_floor:
                out.append((i, j, w))
    return out


def _make_executor(config: BlendingConfig) -> Executor:
    if config.graph_executor == "process":
        return ProcessPoolExecutor(max_workers=config.graph_workers)
    return ThreadPoolExecutor(max_workers=config.graph_workers, thread_name_prefix="graph-build")


def _score_all_pairs(
    vectors: Sequence[FeatureVector],
    config: BlendingConfig,
) -> List[WeightedPair]:
    """All pairs above the floor, in (i, j) order regardless of worker count."""
    n = len(vectors)
    workers = min(config.graph_workers, max(n - 1, 1))
    if workers <= 1:
        return _score_rows(range(n), vectors, config)

    # Round-robin rows so each worker gets a similar share of the triangle
    partitions = [list(range(w, n, workers)) for w in range(workers)]
    with _make_executor(config) as executor:
        futures = [
            executor.submit(_score_rows, rows, list(vectors), config) for rows in partitions
        ]
        results = [f.result() for f in futures]

    merged = [pair for part in results for pair in part]
    merged.sort(key=lambda pair: (pair[0], pair[1]))
    return merged


def build_catalog_graph(
    catalog: Catalog,
    config: Optional[BlendingConfig] = None,
) -> CatalogGraph:
    """
    Build the catalog-wide similarity graph and precompute top-K neighbors.

    Nodes are added in ascending id order. An empty catalog yields an empty
    graph; a single item yields one node and no edges.
    """
    config = resolve_config(config)
    ids = sorted(catalog)
    graph = CatalogGraph(neighbor_k=config.neighbor_k)
    for game_id in ids:
        graph.add_node(game_id)

    vectors = [catalog[game_id].feature_vector for game_id in ids]
    for i, j, w in _score_all_pairs(vectors, config):
        graph.add_edge(ids[i], ids[j], w)
    graph.precompute_neighbors()

    logger.info(
        "[graph] BUILD_COMPLETE nodes=%s edges=%s floor=%s workers=%s",
        graph.node_count, graph.edge_count, config.edge_floor, config.graph_workers,
    )
    return graph


def build_era_subgraph(
    catalog: Catalog,
    eras: Iterable[Era],
    config: Optional[BlendingConfig] = None,
) -> CatalogGraph:
    """Build the graph only over items released within any of the given eras."""
    eras = list(eras)
    selected = {
        game_id: meta
        for game_id, meta in catalog.items()
        if any(era.contains(meta.year) for era in eras)
    }
    logger.debug(
        "[graph] ERA_SUBGRAPH eras=%s games=%s",
        [era.value for era in eras], len(selected),
    )
    return build_catalog_graph(selected, config)
