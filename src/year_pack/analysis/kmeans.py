"""K-Means over sparse term vectors with k-means++ seeding."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

import numpy as np

from year_pack.constants import KMEANS_ITERATIONS, TOP_TERMS_PER_TOPIC
from year_pack.logging_setup import get_logger
from year_pack.schemas import Cluster

log = get_logger(__name__)

Vector = Dict[str, float]


def vector_distance(v1: Vector, v2: Vector) -> float:
    """Euclidean distance; a key missing from one side counts as 0."""
    total = 0.0
    for term in v1.keys() | v2.keys():
        diff = v1.get(term, 0.0) - v2.get(term, 0.0)
        total += diff * diff
    return math.sqrt(total)


def calculate_centroid(vectors: Sequence[Vector], members: Sequence[int]) -> Vector:
    """Per-term mean of the member vectors."""
    if not members:
        return {}
    summed: Vector = {}
    for idx in members:
        for term, value in vectors[idx].items():
            summed[term] = summed.get(term, 0.0) + value
    return {term: value / len(members) for term, value in summed.items()}


def kmeans_plus_plus_init(
    vectors: Sequence[Vector], k: int, rng: np.random.Generator
) -> List[Vector]:
    """Pick ``k`` initial centroids spread out by squared distance."""
    if not vectors:
        return []
    if len(vectors) <= k:
        return [dict(v) for v in vectors]

    chosen = [int(rng.integers(len(vectors)))]
    while len(chosen) < k:
        candidates = [i for i in range(len(vectors)) if i not in chosen]
        weights = np.array(
            [
                min(vector_distance(vectors[i], vectors[c]) for c in chosen) ** 2
                for i in candidates
            ]
        )
        total = weights.sum()
        if total > 0:
            pick = rng.choice(len(candidates), p=weights / total)
        else:
            # remaining vectors coincide with chosen centroids
            pick = rng.integers(len(candidates))
        chosen.append(candidates[int(pick)])

    return [dict(vectors[i]) for i in chosen]


def assign_to_clusters(vectors: Sequence[Vector], centroids: Sequence[Vector]) -> List[int]:
    """Index of the nearest centroid per vector; ties go to the lower index."""
    assignments = []
    for vector in vectors:
        best, best_dist = 0, math.inf
        for i, centroid in enumerate(centroids):
            dist = vector_distance(vector, centroid)
            if dist < best_dist:
                best, best_dist = i, dist
        assignments.append(best)
    return assignments


def top_terms(centroid: Vector, n: int = TOP_TERMS_PER_TOPIC) -> List[str]:
    return [term for term, _ in sorted(centroid.items(), key=lambda kv: kv[1], reverse=True)[:n]]


def kmeans_clustering(
    vectors: Sequence[Vector],
    k: int,
    max_iterations: int = KMEANS_ITERATIONS,
    rng: Optional[np.random.Generator] = None,
    top_n: int = TOP_TERMS_PER_TOPIC,
) -> List[Cluster]:
    """Partition ``vectors`` into at most ``k`` clusters.

    ``rng`` drives k-means++ seeding; pass ``np.random.default_rng(seed)``
    for reproducible clusters. With ``len(vectors) <= k`` every vector is
    its own cluster. Empty clusters keep their previous centroid.
    """
    if not vectors or k < 1:
        return []
    if rng is None:
        rng = np.random.default_rng()

    if len(vectors) <= k:
        return [
            Cluster(id=i, centroid=dict(v), members=[i], top_terms=top_terms(v, top_n))
            for i, v in enumerate(vectors)
        ]

    centroids = kmeans_plus_plus_init(vectors, k, rng)
    assignments: List[int] = []
    iterations = 0
    for iterations in range(1, max_iterations + 1):
        new_assignments = assign_to_clusters(vectors, centroids)
        if new_assignments == assignments:
            # centroids were computed from these exact assignments already
            break
        assignments = new_assignments
        members_by_cluster = _group_members(assignments, k)
        centroids = [
            calculate_centroid(vectors, members) if members else centroids[i]
            for i, members in enumerate(members_by_cluster)
        ]

    log.debug("K-Means finished", k=k, vectors=len(vectors), iterations=iterations)
    return [
        Cluster(id=i, centroid=centroid, members=members, top_terms=top_terms(centroid, top_n))
        for i, (centroid, members) in enumerate(zip(centroids, _group_members(assignments, k)))
    ]


def _group_members(assignments: Sequence[int], k: int) -> List[List[int]]:
    groups: List[List[int]] = [[] for _ in range(k)]
    for idx, cluster in enumerate(assignments):
        groups[cluster].append(idx)
    return groups
