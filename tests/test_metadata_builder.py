"""
Metadata Builder Tests

Tests the offline conversion of raw catalog records into GameMetadata,
plus embedding enrichment and common-pairing population.

Test Scenarios:
---------------
1. Feature vectors follow the genre/platform/year inference tables
2. Unknown genres build without failing (empty genre weights, warning logged)
3. Enrichment returns new instances and leaves the input untouched
4. common_pairings mirrors the graph's top-K neighbors

Run:
----
    pytest tests/test_metadata_builder.py -v
"""

import logging

import pytest

from blending.models.taxonomy import GENRE_COUNT, Genre, Mechanic
from blending.stages.graph_builder import build_catalog_graph
from blending.stages.metadata_builder import (
    build_catalog,
    build_game_metadata,
    enrich_catalog,
    enrich_metadata,
    populate_common_pairings,
)


@pytest.fixture
def catalog(sample_records):
    return build_catalog(sample_records)


class TestBuildGameMetadata:
    """Inference from raw records."""

    def test_ids_are_strings(self, catalog):
        assert sorted(catalog) == ["1", "2", "3", "4", "5", "6", "7", "8"]

    def test_platformer(self, catalog):
        mario = catalog["1"]
        fv = mario.feature_vector
        assert fv.genre_weights[Genre.PLATFORM] == pytest.approx(1.0)
        assert fv.mechanic_flags[Mechanic.PLATFORM_JUMPING]
        assert fv.mechanic_flags[Mechanic.TIME_PRESSURE]
        assert fv.platform_generation == 2
        assert fv.complexity == pytest.approx(0.4 + 5 / 15 * 0.2)
        assert fv.action_strategy_balance == pytest.approx(0.6)
        assert "High Score Chase" in mario.mechanic_tags
        assert mario.era_category == "mid_80s"

    def test_description_adds_secondary_genres(self, catalog):
        zelda = catalog["2"].feature_vector
        assert zelda.genre_weights[Genre.ADVENTURE] == pytest.approx(1.0 / 1.6)
        assert zelda.genre_weights[Genre.PUZZLE] == pytest.approx(0.3 / 1.6)
        assert zelda.genre_weights[Genre.ACTION] == pytest.approx(0.3 / 1.6)

    def test_genre_alias_and_early_rpg_turn_based(self, catalog):
        ff = catalog["3"]
        assert ff.genre_index == Genre.RPG
        assert ff.feature_vector.mechanic_flags[Mechanic.TURN_BASED]
        assert not ff.feature_vector.mechanic_flags[Mechanic.REAL_TIME]

    def test_platform_generations(self, catalog):
        assert catalog["4"].feature_vector.platform_generation == 1  # Arcade listed first
        assert catalog["5"].feature_vector.platform_generation == 3  # PC falls back to year
        assert catalog["8"].feature_vector.platform_generation == 3  # Super Nintendo, not NES

    def test_arcade_favours_multiplayer(self, catalog):
        assert catalog["4"].feature_vector.single_multi_balance == pytest.approx(0.8)
        assert catalog["6"].feature_vector.single_multi_balance == pytest.approx(0.5)
        assert catalog["6"].feature_vector.mechanic_flags[Mechanic.MULTIPLAYER]

    def test_portable_tag(self, catalog):
        assert "Portable Friendly" in catalog["7"].mechanic_tags

    def test_taxonomy_lengths(self, catalog):
        for meta in catalog.values():
            assert len(meta.feature_vector.genre_weights) == GENRE_COUNT

    def test_unknown_genre(self, caplog):
        with caplog.at_level(logging.WARNING):
            meta = build_game_metadata({"id": "x", "name": "Mystery", "year": 1990, "genre": "Educational"})
        assert meta.genre_index is None
        assert sum(meta.feature_vector.genre_weights) == 0.0
        assert meta.genre_affinities == {"Educational": 1.0}
        assert "UNKNOWN_GENRE" in caplog.text

    def test_duplicate_ids_rejected(self, sample_records):
        with pytest.raises(ValueError):
            build_catalog(sample_records + [sample_records[0]])


class TestEnrichment:
    """Enrichment never mutates existing entries."""

    def test_enrich_metadata_returns_new_instance(self, catalog):
        original = catalog["1"]
        enriched = enrich_metadata(
            original,
            embedding=[0.1, 0.2, 0.3],
            mechanics=["Secrets"],
            moods=["Whimsical"],
            genre_blend={"Adventure": 0.4},
        )
        assert enriched is not original
        assert original.feature_vector.semantic_embedding is None
        assert enriched.feature_vector.semantic_embedding == (0.1, 0.2, 0.3)
        assert "Secrets" in enriched.mechanic_tags
        assert enriched.mood_tags[-1] == "Whimsical"
        assert enriched.genre_affinities["Adventure"] == 0.4

    def test_enrichment_keeps_mechanic_tag_order(self, make_game):
        game = make_game("z", mechanic_tags=("Stealth", "Combat"))
        assert enrich_catalog({"z": game}, {"z": [1.0, 0.0]})["z"].mechanic_tags == ("Stealth", "Combat")
        enriched = enrich_metadata(game, mechanics=["Puzzle", "Combat", "Exploration", "Puzzle"])
        assert enriched.mechanic_tags == ("Stealth", "Combat", "Puzzle", "Exploration")

    def test_enrich_catalog_skips_mismatched_dimension(self, catalog, caplog):
        with caplog.at_level(logging.WARNING):
            enriched = enrich_catalog(catalog, {"1": [1.0, 0.0], "2": [1.0, 0.0, 0.0]})
        assert enriched["1"].feature_vector.has_embedding
        assert not enriched["2"].feature_vector.has_embedding
        assert enriched["3"] is catalog["3"]
        assert "EMBEDDING_DIM_MISMATCH" in caplog.text

    def test_populate_common_pairings(self, catalog):
        graph = build_catalog_graph(catalog)
        populated = populate_common_pairings(catalog, graph)
        for game_id, meta in populated.items():
            assert meta.common_pairings == dict(graph.neighbors(game_id))
            assert catalog[game_id].common_pairings == {}
