"""
Game models — raw catalog records and the precomputed metadata the engine compares.

GameRecord is the read-only item description supplied by the catalog.
GameMetadata adds the feature vector and human-facing tags produced by the
metadata builder. Both are built from dataset dicts via model_validate(d).
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .features import FeatureVector
from .taxonomy import era_category, genre_index


def _dedupe(labels: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for label in labels:
        if label not in seen:
            seen.add(label)
            out.append(label)
    return tuple(out)


class GameRecord(BaseModel):
    """One catalog item as supplied by the external catalog builder."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    year: int
    genre: str = ""
    platforms: Tuple[str, ...] = ()
    description: Optional[str] = None
    developer: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class GameMetadata(GameRecord):
    """
    Catalog entry: item attributes, feature vector, and annotation tags.

    genre_index is resolved from genre once, at validation time; rule tables
    compare indices, never labels. common_pairings is a cache of top-K
    similarities filled by the builder and is never consulted as truth.
    """

    feature_vector: FeatureVector
    mechanic_tags: Tuple[str, ...] = ()
    mood_tags: Tuple[str, ...] = ()
    genre_affinities: Dict[str, float] = {}
    era_category: str = ""
    common_pairings: Dict[str, float] = {}
    genre_index: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("era_category") and data.get("year") is not None:
            data["era_category"] = era_category(int(data["year"]))
        data["genre_index"] = genre_index(data.get("genre"))
        return data

    @field_validator("mechanic_tags", "mood_tags", mode="after")
    @classmethod
    def _unique_tags(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _dedupe(v)

    @property
    def complexity(self) -> float:
        return self.feature_vector.complexity

    @property
    def action_strategy_balance(self) -> float:
        return self.feature_vector.action_strategy_balance


Catalog = Dict[str, GameMetadata]


def ensure_catalog(
    games: Union[Mapping[str, Union[Dict[str, Any], GameMetadata]], List[Union[Dict[str, Any], GameMetadata]]],
) -> Catalog:
    """
    Convert a list of dicts/GameMetadata (or an id-keyed mapping of them) to a Catalog.

    Raises ValueError on duplicate ids.
    """
    values = games.values() if isinstance(games, Mapping) else games
    catalog: Catalog = {}
    for g in values:
        meta = GameMetadata.model_validate(g) if isinstance(g, dict) else g
        if meta.id in catalog:
            raise ValueError(f"Duplicate game id in catalog: {meta.id}")
        catalog[meta.id] = meta
    return catalog
