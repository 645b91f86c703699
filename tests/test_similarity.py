"""
Similarity Engine Tests

Tests the pairwise compatibility score over feature vectors.

Weights are a tunable reconstruction, so scores are checked with
pytest.approx (approximate parity), never byte-exact values.

Test Scenarios:
---------------
1. Symmetry: similarity(a, b) == similarity(b, a) over a catalog
2. Bounded range: every pair scores within [0, 1]
3. Self-maximality: identical non-degenerate vectors score 1.0
4. Zero-vector safety: an all-zero genre vector gives a genre sub-score of 0
5. Semantic renormalization: missing embeddings drop the semantic weight

Run:
----
    pytest tests/test_similarity.py -v
"""

import itertools

import pytest

from blending.models.config import BlendingConfig, DEFAULT_CONFIG
from blending.models.taxonomy import Genre, Mechanic
from blending.stages.similarity import game_similarity, similarity, sub_scores
from blending.utils.similarity import closeness, cosine_similarity, match_ratio


class TestSimilarityUtils:
    """Vector and scalar closeness helpers."""

    def test_cosine_of_parallel_vectors(self):
        assert cosine_similarity([1.0, 2.0, 0.0], [2.0, 4.0, 0.0]) == pytest.approx(1.0)

    def test_cosine_of_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_cosine_degenerate_inputs_are_zero(self):
        assert cosine_similarity([], []) == 0.0
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([1.0], [1.0, 0.0]) == 0.0

    def test_match_ratio(self):
        assert match_ratio([True, False, True, False], [True, True, True, False]) == 0.75
        assert match_ratio([], []) == 0.0

    def test_closeness_clamped(self):
        assert closeness(1, 5, 4) == 0.0
        assert closeness(0.2, 0.2, 1.0) == 1.0
        assert closeness(-1.0, 1.0, 2.0) == 0.0
        assert closeness(0.5, 0.0, 2.0) == pytest.approx(0.75)


class TestSimilarityProperties:
    """Symmetry, range, and self-maximality across a catalog."""

    def test_symmetry(self, small_catalog):
        for a, b in itertools.combinations(small_catalog.values(), 2):
            assert game_similarity(a, b) == game_similarity(b, a)

    def test_bounded_range(self, small_catalog):
        for a, b in itertools.product(small_catalog.values(), repeat=2):
            score = game_similarity(a, b)
            assert 0.0 <= score <= 1.0

    def test_self_maximality(self, small_catalog):
        for game in small_catalog.values():
            assert game_similarity(game, game) == pytest.approx(1.0)
            for other in small_catalog.values():
                assert game_similarity(game, other) <= game_similarity(game, game) + 1e-9

    def test_self_maximality_with_embedding(self, make_vector):
        v = make_vector(genres={Genre.ACTION: 1.0}, embedding=[0.3, 0.1, 0.9])
        assert similarity(v, v) == pytest.approx(1.0)

    def test_zero_genre_vector_is_safe(self, make_vector):
        zero = make_vector(genres={})
        other = make_vector(genres={Genre.PUZZLE: 1.0})
        scores = sub_scores(zero, other)
        assert scores["genre"] == 0.0
        assert 0.0 <= similarity(zero, other) <= 1.0
        assert 0.0 <= similarity(zero, zero) <= 1.0


class TestSubScores:
    """Individual sub-score formulas."""

    def test_era_closeness(self, make_vector):
        a = make_vector(generation=1)
        b = make_vector(generation=3)
        assert sub_scores(a, b)["era"] == pytest.approx(0.5)

    def test_complexity_closeness(self, make_vector):
        a = make_vector(complexity=0.9)
        b = make_vector(complexity=0.2)
        assert sub_scores(a, b)["complexity"] == pytest.approx(0.3)

    def test_style_closeness_averages_both_balances(self, make_vector):
        a = make_vector(action=1.0, multi=0.0)
        b = make_vector(action=-1.0, multi=0.0)
        # action closeness 0.0, multi closeness 1.0
        assert sub_scores(a, b)["style"] == pytest.approx(0.5)

    def test_mechanics_match_ratio(self, make_vector):
        a = make_vector(mechanics=(Mechanic.COMBAT,))
        b = make_vector(mechanics=(Mechanic.EXPLORATION,))
        # 15 positions, two disagree
        assert sub_scores(a, b)["mechanics"] == pytest.approx(13 / 15)

    def test_disjoint_genres_score_zero(self, make_vector):
        a = make_vector(genres={Genre.ACTION: 1.0})
        b = make_vector(genres={Genre.STRATEGY: 1.0})
        assert sub_scores(a, b)["genre"] == 0.0


class TestSemanticRenormalization:
    """Semantic sub-score participates only when both items are enriched."""

    def test_absent_on_one_side_drops_semantic(self, make_vector):
        a = make_vector(genres={Genre.ACTION: 1.0}, embedding=[1.0, 0.0])
        b = make_vector(genres={Genre.ACTION: 1.0})
        assert "semantic" not in sub_scores(a, b)

    def test_unenriched_identical_items_are_not_penalized(self, make_vector):
        a = make_vector(genres={Genre.RPG: 1.0})
        assert similarity(a, a) == pytest.approx(1.0)

    def test_semantic_changes_score_when_both_present(self, make_vector):
        plain_a = make_vector(genres={Genre.ACTION: 1.0}, complexity=0.4)
        plain_b = make_vector(genres={Genre.ACTION: 1.0}, complexity=0.6)
        base = similarity(plain_a, plain_b)

        a = plain_a.with_embedding([1.0, 0.0])
        b = plain_b.with_embedding([0.0, 1.0])
        assert sub_scores(a, b)["semantic"] == 0.0
        assert similarity(a, b) < base

    def test_mismatched_embedding_dimension_treated_as_absent(self, make_vector):
        a = make_vector(embedding=[1.0, 0.0, 0.0])
        b = make_vector(embedding=[1.0, 0.0])
        assert "semantic" not in sub_scores(a, b)

    def test_effective_weights_sum_to_one(self):
        for has_semantic in (True, False):
            weights = DEFAULT_CONFIG.effective_weights(has_semantic)
            assert sum(weights.values()) == pytest.approx(1.0)
        plain = DEFAULT_CONFIG.effective_weights(False)
        assert plain["genre"] == pytest.approx(0.35 / 0.9)

    def test_custom_weights(self, make_vector):
        config = BlendingConfig(
            weight_genre=1.0,
            weight_mechanics=0.0,
            weight_era=0.0,
            weight_complexity=0.0,
            weight_style=0.0,
            weight_semantic=0.0,
        )
        a = make_vector(genres={Genre.ACTION: 1.0}, generation=1)
        b = make_vector(genres={Genre.ACTION: 1.0}, generation=5)
        assert similarity(a, b, config) == pytest.approx(1.0)
