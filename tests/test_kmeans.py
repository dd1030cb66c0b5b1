"""Test K-Means clustering over sparse vectors."""

import numpy as np
import pytest

from year_pack.analysis.kmeans import (
    assign_to_clusters,
    calculate_centroid,
    kmeans_clustering,
    kmeans_plus_plus_init,
    top_terms,
    vector_distance,
)


def _mixed_vectors():
    rng = np.random.default_rng(7)
    terms = ["react", "hooks", "docker", "volume", "query", "index"]
    return [
        {term: float(w) for term, w in zip(terms, rng.random(len(terms))) if w > 0.4}
        for _ in range(20)
    ]


def test_vector_distance_treats_missing_terms_as_zero():
    assert vector_distance({"a": 3.0}, {"b": 4.0}) == pytest.approx(5.0)
    assert vector_distance({}, {}) == 0.0


def test_centroid_is_mean():
    vectors = [{"a": 1.0}, {"a": 3.0, "b": 2.0}, {"c": 9.0}]
    assert calculate_centroid(vectors, [0, 1]) == pytest.approx({"a": 2.0, "b": 1.0})
    assert calculate_centroid(vectors, []) == {}


def test_assignment_ties_go_to_lower_index():
    assert assign_to_clusters([{"a": 1.0}], [{"a": 0.0}, {"a": 2.0}]) == [0]


def test_top_terms():
    assert top_terms({"a": 0.1, "b": 0.9, "c": 0.5}, 2) == ["b", "c"]


def test_plus_plus_init_picks_distinct_vectors():
    vectors = [{"x": 1.0}] * 3 + [{"y": 1.0}] * 3
    centroids = kmeans_plus_plus_init(vectors, 2, np.random.default_rng(0))
    assert len(centroids) == 2
    # an identical vector has zero weight, so the second pick comes from the other group
    assert centroids[0] != centroids[1]


def test_separated_groups():
    vectors = [{"x": 1.0}] * 3 + [{"y": 1.0}] * 3
    clusters = kmeans_clustering(vectors, 2, rng=np.random.default_rng(0))
    assert {frozenset(c.members) for c in clusters} == {frozenset([0, 1, 2]), frozenset([3, 4, 5])}
    assert sorted(c.top_terms[0] for c in clusters) == ["x", "y"]


def test_each_vector_own_cluster_when_k_is_large():
    vectors = [{"a": 1.0}, {"b": 1.0}]
    clusters = kmeans_clustering(vectors, 5, rng=np.random.default_rng(1))
    assert [c.members for c in clusters] == [[0], [1]]
    assert clusters[1].top_terms == ["b"]


def test_empty_input():
    assert kmeans_clustering([], 3) == []


def test_identical_vectors_leave_clusters_empty():
    clusters = kmeans_clustering([{"a": 1.0}] * 4, 2, rng=np.random.default_rng(3))
    assert len(clusters) == 2
    assert sorted(len(c.members) for c in clusters) == [0, 4]


def test_seeded_clustering_is_deterministic():
    vectors = _mixed_vectors()
    first = kmeans_clustering(vectors, 3, rng=np.random.default_rng(42))
    second = kmeans_clustering(vectors, 3, rng=np.random.default_rng(42))
    assert first == second
    assert sum(len(c.members) for c in first) == len(vectors)
