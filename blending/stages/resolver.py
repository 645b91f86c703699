"""
Blend resolver — maximum-compatibility spanning tree over a selection.

Builds the complete weighted subgraph on the selected ids (prebuilt graph
weights when available, similarity engine otherwise), negates every weight,
runs Kruskal's minimum spanning tree, and negates back. The result is the
maximum-weight spanning tree: |selection| - 1 edges touching every item.

Nodes live in an arena (list index = selection position) and edges in a flat
list of (weight, i, j), so the tree step needs no graph library.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from blending.models.config import BlendingConfig, resolve_config
from blending.models.errors import InsufficientSelection, UnknownGame
from blending.models.game import Catalog
from blending.models.results import BlendPath, CompatibilityEdge

from .annotator import analyze_edge
from .graph_builder import CatalogGraph
from .similarity import game_similarity

logger = logging.getLogger(__name__)

MIN_SELECTION = 2

Edge = Tuple[float, int, int]


class _DisjointSet:
    """Union-find with path halving and union by size."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.size = [1] * size

    def find(self, x: int) -> int:
        while self.parent[x] != x:
            self.parent[x] = self.parent[self.parent[x]]
            x = self.parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        return True


def minimum_spanning_tree(node_count: int, edges: Sequence[Edge]) -> List[Edge]:
    """
    Kruskal's algorithm over an edge list of (weight, i, j).

    Edges are considered by ascending weight, ties by (i, j), so the result is
    stable for identical inputs. Returns accepted edges in acceptance order
    (a spanning forest if the graph is disconnected).
    """
    dsu = _DisjointSet(node_count)
    tree: List[Edge] = []
    for edge in sorted(edges, key=lambda e: (e[0], e[1], e[2])):
        _, i, j = edge
        if dsu.union(i, j):
            tree.append(edge)
            if len(tree) == node_count - 1:
                break
    return tree


def normalize_selection(selected: Iterable[str]) -> List[str]:
    """
    Distinct ids in a deterministic order.

    A bare string is one id, not a sequence of characters. Sequences keep
    first-occurrence order; unordered collections (sets) are sorted so that
    identical inputs always resolve identically.
    """
    if isinstance(selected, str):
        return [selected]
    if isinstance(selected, (set, frozenset)):
        return sorted(selected)
    seen = set()
    ordered = []
    for game_id in selected:
        if game_id not in seen:
            seen.add(game_id)
            ordered.append(game_id)
    return ordered


def _pair_weight(
    id_a: str,
    id_b: str,
    catalog: Catalog,
    config: BlendingConfig,
    graph: Optional[CatalogGraph],
) -> float:
    """Prebuilt graph weight when the pair has an edge; otherwise recompute."""
    if graph is not None:
        w = graph.weight(id_a, id_b)
        if w is not None:
            return w
    return game_similarity(catalog[id_a], catalog[id_b], config)


def resolve_blend(
    selected: Iterable[str],
    catalog: Catalog,
    config: Optional[BlendingConfig] = None,
    graph: Optional[CatalogGraph] = None,
) -> BlendPath:
    """
    Resolve the maximum-compatibility blend of the selected ids.

    Raises:
        InsufficientSelection: fewer than two distinct ids.
        UnknownGame: an id is absent from the catalog (first in selection order).
    """
    config = resolve_config(config)
    ids = normalize_selection(selected)
    if len(ids) < MIN_SELECTION:
        raise InsufficientSelection(len(ids), MIN_SELECTION)
    for game_id in ids:
        if game_id not in catalog:
            raise UnknownGame(game_id)

    # Complete subgraph on the selection, weights negated for the min tree
    negated: List[Edge] = []
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            w = _pair_weight(ids[i], ids[j], catalog, config, graph)
            negated.append((-w, i, j))

    tree = minimum_spanning_tree(len(ids), negated)

    edges: List[CompatibilityEdge] = []
    for neg_w, i, j in tree:
        edges.append(analyze_edge(catalog[ids[i]], catalog[ids[j]], config, weight=-neg_w))

    total = sum(edge.weight for edge in edges)
    logger.debug(
        "[resolver] BLEND_RESOLVED games=%s edges=%s total=%.4f",
        len(ids), len(edges), total,
    )
    return BlendPath(
        games=ids,
        edges=edges,
        total_compatibility=total,
        synergies=[s for edge in edges for s in edge.synergies],
        conflicts=[c for edge in edges for c in edge.conflicts],
    )
