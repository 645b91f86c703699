"""
Model Tests

Tests taxonomy resolution, feature vector invariants, and catalog entries.

Run:
----
    pytest tests/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from blending.models import (
    Era,
    FeatureVector,
    GameMetadata,
    Genre,
    ensure_catalog,
    era_category,
    era_for_year,
    genre_index,
    mechanic_index,
)
from blending.models.taxonomy import GENRE_COUNT, MECHANIC_COUNT, normalize_tag


class TestTaxonomy:

    def test_genre_index(self):
        assert genre_index("Action") == Genre.ACTION
        assert genre_index(" rpg ") == Genre.RPG
        assert genre_index("Role-Playing") == Genre.RPG
        assert genre_index("Platformer") == Genre.PLATFORM
        assert genre_index("Educational") is None
        assert genre_index(None) is None

    def test_mechanic_index(self):
        assert mechanic_index("turn-based") is not None
        assert mechanic_index("flying") is None

    def test_normalize_tag(self):
        assert normalize_tag("Character Progression") == "character_progression"
        assert normalize_tag("Real-Time") == "real_time"

    def test_eras(self):
        assert era_for_year(1981) is Era.ARCADE_GOLDEN_AGE
        assert era_for_year(1995) is Era.PEAK_16BIT
        assert era_for_year(2001) is None
        assert Era.EARLY_CONSOLE.year_range == (1984, 1987)
        assert era_category(1984) == "mid_80s"
        assert era_category(1979) == "unknown"


class TestFeatureVector:

    def _data(self, **overrides):
        data = {
            "genre_weights": [0.0] * GENRE_COUNT,
            "mechanic_flags": [False] * MECHANIC_COUNT,
            "platform_generation": 3,
            "complexity": 0.5,
        }
        data.update(overrides)
        return data

    def test_taxonomy_length_enforced(self):
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(genre_weights=[1.0]))
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(mechanic_flags=[True] * (MECHANIC_COUNT + 1)))

    def test_ranges_enforced(self):
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(platform_generation=6))
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(complexity=1.5))
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(action_strategy_balance=-1.2))
        with pytest.raises(ValidationError):
            FeatureVector.model_validate(self._data(genre_weights=[-0.1] + [0.0] * (GENRE_COUNT - 1)))

    def test_immutable(self):
        fv = FeatureVector.model_validate(self._data())
        with pytest.raises(ValidationError):
            fv.complexity = 0.9

    def test_with_embedding_is_new_instance(self):
        fv = FeatureVector.model_validate(self._data())
        enriched = fv.with_embedding([0.5, 0.5])
        assert enriched is not fv
        assert not fv.has_embedding
        assert enriched.has_embedding
        assert not FeatureVector.model_validate(self._data(semantic_embedding=[])).has_embedding


class TestGameMetadata:

    def test_derived_fields(self, make_game):
        game = make_game(7, year=1992, genre="Strategy", mechanic_tags=("Combat", "Combat"))
        assert game.id == "7"
        assert game.era_category == "early_90s"
        assert game.genre_index == Genre.STRATEGY
        assert game.mechanic_tags == ("Combat",)
        assert game.common_pairings == {}

    def test_explicit_era_category_kept(self, make_game):
        assert make_game("x", year=1992, era_category="custom").era_category == "custom"

    def test_ensure_catalog(self, make_game):
        a, b = make_game("a"), make_game("b")
        assert list(ensure_catalog([a, b])) == ["a", "b"]
        assert ensure_catalog({"a": a})["a"] is a
        dumped = a.model_dump()
        assert isinstance(ensure_catalog([dumped])["a"], GameMetadata)
        with pytest.raises(ValueError):
            ensure_catalog([a, a])
