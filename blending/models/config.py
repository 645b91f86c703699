"""
Blending configuration — similarity weights, graph build, and neighbor parameters.

BlendingConfig defaults are defined here. A host may pass a dict (e.g. from a
blending config JSON file); from_dict() merges it with these defaults.
Weights are tunable; the defaults are a reconstruction, not a fixed law.
"""

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BlendingConfig(BaseModel):
    """Configuration for the similarity engine, graph builder, and resolver."""

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # Similarity sub-score weights (must sum to 1.0)
    # similarity = Σ weight_x * sub_score_x
    # When either item lacks a semantic embedding, weight_semantic is dropped
    # and the remaining weights are rescaled to sum to 1.0.
    # -------------------------------------------------------------------------

    # Cosine similarity of genre weight vectors.
    weight_genre: float = Field(0.35, ge=0.0)
    # Fraction of mechanic taxonomy positions where both flags agree.
    weight_mechanics: float = Field(0.25, ge=0.0)
    # Closeness of platform generation ordinals.
    weight_era: float = Field(0.10, ge=0.0)
    # Closeness of complexity scalars.
    weight_complexity: float = Field(0.10, ge=0.0)
    # Closeness of action/strategy and single/multi balance scalars.
    weight_style: float = Field(0.10, ge=0.0)
    # Cosine similarity of semantic embeddings (only when both items carry one).
    weight_semantic: float = Field(0.10, ge=0.0)

    # -------------------------------------------------------------------------
    # Feature model
    # -------------------------------------------------------------------------

    # Highest platform generation ordinal; era closeness = 1 - |Δgen| / (max_generation - 1).
    max_generation: int = Field(5, ge=2)

    # -------------------------------------------------------------------------
    # Catalog graph
    # -------------------------------------------------------------------------

    # Edges are kept only for pairs whose similarity is strictly above this floor.
    edge_floor: float = Field(0.1, ge=0.0, le=1.0)
    # Neighbors precomputed per item.
    neighbor_k: int = Field(10, ge=1)
    # Workers for the all-pairs build. 1 = run in the calling thread.
    graph_workers: int = Field(1, ge=1)
    # Executor used when graph_workers > 1.
    graph_executor: Literal["thread", "process"] = "thread"

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        total = (
            self.weight_genre
            + self.weight_mechanics
            + self.weight_era
            + self.weight_complexity
            + self.weight_style
            + self.weight_semantic
        )
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Similarity weights must sum to 1.0, got {total}")
        if self.weight_semantic >= total:
            raise ValueError("At least one non-semantic similarity weight must be positive")
        return self

    def effective_weights(self, has_semantic: bool) -> Dict[str, float]:
        """
        Weights applied to each sub-score for one comparison.

        With semantic enrichment on both sides the configured split is used as-is.
        Otherwise the semantic weight is dropped and the rest rescaled so they
        still sum to 1.0; items without enrichment are not penalized.
        """
        weights = {
            "genre": self.weight_genre,
            "mechanics": self.weight_mechanics,
            "era": self.weight_era,
            "complexity": self.weight_complexity,
            "style": self.weight_style,
        }
        if has_semantic:
            weights["semantic"] = self.weight_semantic
        total = sum(weights.values())
        return {name: w / total for name, w in weights.items()}

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "BlendingConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "weights" in config_dict:
            for name, value in config_dict["weights"].items():
                flat[f"weight_{name}"] = value
        if "features" in config_dict:
            flat.update(config_dict["features"])
        if "graph" in config_dict:
            graph = config_dict["graph"]
            if "floor" in graph:
                flat["edge_floor"] = graph["floor"]
            if "top_k" in graph:
                flat["neighbor_k"] = graph["top_k"]
            if "workers" in graph:
                flat["graph_workers"] = graph["workers"]
            if "executor" in graph:
                flat["graph_executor"] = graph["executor"]
        # Flat keys are accepted as well
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = BlendingConfig()


def resolve_config(config: Optional["BlendingConfig"]) -> "BlendingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
