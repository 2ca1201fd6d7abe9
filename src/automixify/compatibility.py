from __future__ import annotations

from typing import Mapping, Sequence

from automixify.models import FeatureVector, Track

Matrix = list[list[float]]

_SAME_KEY_SAME_MODE = 2.0
_SAME_KEY_RELATIVE_MODE = 1.6
_ADJACENT_KEY = 1.2
_NEAR_KEY = 0.6
_MAX_TEMPO = 1.5
# BPM difference worth one point of tempo bonus.
_TEMPO_SCALE = 30.0
_MAX_ENERGY = 1.0
_DANCEABILITY_WEIGHT = 0.8

MAX_SCORE = _SAME_KEY_SAME_MODE + _MAX_TEMPO + _MAX_ENERGY + _DANCEABILITY_WEIGHT


def _distance(a: float, b: float) -> float:
    return abs(a - b)


def _key_distance(a: int, b: int) -> int:
    """Distance between two pitch classes on the 12-step wheel."""
    diff = abs(a - b)
    return min(diff, 12 - diff)


def score_compatibility(a: FeatureVector | None, b: FeatureVector | None) -> float:
    if a is None or b is None:
        return 0.0

    score = 0.0
    if a.key == b.key and a.mode == b.mode:
        score += _SAME_KEY_SAME_MODE
    elif a.key == b.key:
        score += _SAME_KEY_RELATIVE_MODE

    key_dist = _key_distance(a.key, b.key)
    if key_dist == 1:
        score += _ADJACENT_KEY
    elif key_dist == 2:
        score += _NEAR_KEY

    score += max(0.0, _MAX_TEMPO - _distance(a.tempo, b.tempo) / _TEMPO_SCALE)
    score += max(0.0, _MAX_ENERGY - _distance(a.energy, b.energy))
    score += _DANCEABILITY_WEIGHT * max(0.0, 1.0 - _distance(a.danceability, b.danceability))
    return score


def build_compatibility_matrix(
    tracks: Sequence[Track],
    feature_store: Mapping[str, FeatureVector],
) -> Matrix:
    features = [feature_store.get(track.id) for track in tracks]
    n = len(tracks)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if i != j:
                matrix[i][j] = score_compatibility(features[i], features[j])
    return matrix


def path_score(order: Sequence[int], matrix: Matrix) -> float:
    """Sum of adjacent compatibilities along ``order`` (open path, no wrap)."""
    return sum(matrix[order[k]][order[k + 1]] for k in range(len(order) - 1))
