"""Play-order sequencing: greedy nearest-neighbour seed plus relocation local search."""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from automixify.compatibility import Matrix, build_compatibility_matrix, path_score
from automixify.models import FeatureVector, OrderedTrack, SequenceResult, Track, Transition

logger = logging.getLogger(__name__)


class SequencingError(Exception):
    """Raised when no play order can be computed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"could not compute an order: {reason}")
        self.reason = reason


class InvalidInputError(SequencingError):
    pass


def _seed_index(matrix: Matrix) -> int:
    n = len(matrix)
    if n == 1:
        return 0

    best_idx = 0
    best_avg = float("-inf")
    for i in range(n):
        avg = sum(matrix[i]) / (n - 1)
        if avg > best_avg:
            best_avg = avg
            best_idx = i
    return best_idx


def greedy_order(matrix: Matrix) -> list[int]:
    """Build an initial order by always stepping to the most compatible unused track.

    Starts from the track with the highest mean compatibility. Ties go to the
    lowest index, both for the seed and for every extension step.
    """
    n = len(matrix)
    start = _seed_index(matrix)
    order = [start]
    used = [False] * n
    used[start] = True

    while len(order) < n:
        last = order[-1]
        best = -1
        best_score = float("-inf")
        for j in range(n):
            if not used[j] and matrix[last][j] > best_score:
                best_score = matrix[last][j]
                best = j
        order.append(best)
        used[best] = True
    return order


def _first_improvement(order: list[int], matrix: Matrix) -> list[int] | None:
    current = path_score(order, matrix)
    n = len(order)
    for i in range(1, n - 1):
        for j in range(i + 1, n):
            candidate = order[:]
            moved = candidate.pop(i)
            candidate.insert(j, moved)
            if path_score(candidate, matrix) > current:
                return candidate
    return None


def refine_order(order: list[int], matrix: Matrix) -> list[int]:
    """Relocate single tracks later in the order until no move raises the path score.

    The first position is never moved. Each accepted move restarts the scan.
    ``order`` is updated in place and returned.
    """
    moves = 0
    while True:
        candidate = _first_improvement(order, matrix)
        if candidate is None:
            break
        order[:] = candidate
        moves += 1
    logger.debug("Local search converged after %d relocation(s)", moves)
    return order


def sequence_tracks(
    tracks: Sequence[Track],
    feature_store: Mapping[str, FeatureVector],
) -> SequenceResult:
    if not tracks:
        raise InvalidInputError("no tracks supplied")

    matrix = build_compatibility_matrix(tracks, feature_store)
    order = greedy_order(matrix)
    greedy_score = path_score(order, matrix)
    refine_order(order, matrix)
    logger.info(
        "Sequenced %d track(s): greedy path score %.3f, refined %.3f",
        len(tracks),
        greedy_score,
        path_score(order, matrix),
    )

    ordered = [
        OrderedTrack(index=idx, track=tracks[idx], features=feature_store.get(tracks[idx].id))
        for idx in order
    ]
    transitions = [
        Transition(
            from_name=tracks[a].name,
            to_name=tracks[b].name,
            score=matrix[a][b],
        )
        for a, b in zip(order, order[1:])
    ]
    return SequenceResult(ordered=ordered, transitions=transitions)
