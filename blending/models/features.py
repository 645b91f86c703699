"""
Feature vector — the machine-comparable attributes of one catalog item.

Instances are immutable. Enrichment (e.g. attaching a semantic embedding)
returns a new FeatureVector so in-flight comparisons never observe a change.
"""

from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .taxonomy import GENRE_COUNT, MECHANIC_COUNT

MAX_PLATFORM_GENERATION = 5


class FeatureVector(BaseModel):
    """
    Feature vector laid out against the shared taxonomy.

    genre_weights[i] is the affinity to taxonomy genre i (>= 0, need not sum to 1);
    mechanic_flags[i] is True iff the item exhibits taxonomy mechanic i.
    """

    model_config = ConfigDict(frozen=True)

    genre_weights: Tuple[float, ...]
    mechanic_flags: Tuple[bool, ...]
    platform_generation: int = Field(..., ge=1, le=MAX_PLATFORM_GENERATION)
    complexity: float = Field(..., ge=0.0, le=1.0)
    # -1 = strategic/slow, +1 = action/fast
    action_strategy_balance: float = Field(0.0, ge=-1.0, le=1.0)
    # -1 = single-player oriented, +1 = multiplayer oriented
    single_multi_balance: float = Field(0.0, ge=-1.0, le=1.0)
    semantic_embedding: Optional[Tuple[float, ...]] = None

    @field_validator("genre_weights")
    @classmethod
    def _genre_weights_match_taxonomy(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        if len(v) != GENRE_COUNT:
            raise ValueError(f"genre_weights must have {GENRE_COUNT} entries, got {len(v)}")
        if any(w < 0 for w in v):
            raise ValueError("genre_weights must be non-negative")
        return v

    @field_validator("mechanic_flags")
    @classmethod
    def _mechanic_flags_match_taxonomy(cls, v: Tuple[bool, ...]) -> Tuple[bool, ...]:
        if len(v) != MECHANIC_COUNT:
            raise ValueError(f"mechanic_flags must have {MECHANIC_COUNT} entries, got {len(v)}")
        return v

    @field_validator("semantic_embedding")
    @classmethod
    def _empty_embedding_is_absent(
        cls, v: Optional[Tuple[float, ...]]
    ) -> Optional[Tuple[float, ...]]:
        return v if v else None

    @property
    def has_embedding(self) -> bool:
        return self.semantic_embedding is not None

    def with_embedding(self, embedding: Optional[Sequence[float]]) -> "FeatureVector":
        """Copy of this vector carrying the given embedding (None removes it)."""
        data = self.model_dump()
        data["semantic_embedding"] = tuple(embedding) if embedding else None
        return FeatureVector.model_validate(data)
