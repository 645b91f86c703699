"""
Computed Parameters for the blending engine

This module computes derived parameters from base parameters.
Computed parameters are read-only for a host UI and are recalculated
whenever the base parameters change.
"""

from typing import Any, Dict

from blending.models.config import BlendingConfig

_SUB_SCORES = ("genre", "mechanics", "era", "complexity", "style")


def compute_parameters(base_params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compute derived parameters from base parameters.

    Args:
        base_params: Tunable base parameters (same shape BlendingConfig.from_dict accepts)

    Returns:
        Dictionary of computed parameter values
    """
    config = BlendingConfig.from_dict(base_params)
    computed: Dict[str, Any] = {}

    # =========================================================================
    # Effective similarity weights (with and without semantic enrichment)
    # =========================================================================
    enriched = config.effective_weights(has_semantic=True)
    plain = config.effective_weights(has_semantic=False)
    for name in _SUB_SCORES:
        computed[f"enriched_weight_{name}"] = enriched[name]
        computed[f"plain_weight_{name}"] = plain[name]
    computed["enriched_weight_semantic"] = enriched["semantic"]

    # Share of the score the semantic signal takes over when both items are enriched
    computed["semantic_share"] = enriched["semantic"]

    # =========================================================================
    # Era closeness step (score lost per generation apart)
    # =========================================================================
    computed["era_step"] = 1.0 / (config.max_generation - 1)

    # =========================================================================
    # Graph build
    # =========================================================================
    computed["edge_floor"] = config.edge_floor
    computed["neighbor_k"] = config.neighbor_k
    computed["parallel_build"] = config.graph_workers > 1
    computed["build_strategy"] = (
        f"{config.graph_workers} {config.graph_executor} workers"
        if config.graph_workers > 1
        else "Serial"
    )

    return computed
