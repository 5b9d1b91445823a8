"""
Input validation and centroid seeding.

Seeds are drawn from the dataset itself: a random index is accepted only if
its point is not already used as a centroid, otherwise a new index is drawn.
"""

import numbers
from typing import List, Sequence, Union

import numpy as np

from .exceptions import (
    EmptyDataset,
    InconsistentDimension,
    InsufficientDistinctPoints,
    InvalidConfiguration,
)


def check_random_state(random_state: Union[None, int, np.random.Generator, object]):
    """
    Turn ``random_state`` into a random source.

    None and integers give a fresh ``numpy.random.Generator``. Anything else is
    used as is and only needs an ``integers(high)`` method.
    """
    if random_state is None or isinstance(random_state, numbers.Integral):
        return np.random.default_rng(random_state)
    if not hasattr(random_state, 'integers'):
        raise InvalidConfiguration(
            f"random_state must be None, an int or expose integers(), got {type(random_state).__name__}"
        )
    return random_state


def check_dataset(dataset) -> np.ndarray:
    """
    Validate the raw dataset and return it as a read-only float64 matrix.

    Raises:
        EmptyDataset: no points were given
        InconsistentDimension: points are not sequences of the same length
    """
    if dataset is None or len(dataset) == 0:
        raise EmptyDataset("Dataset must contain at least one point")

    if np.ndim(dataset[0]) != 1:
        raise InconsistentDimension("Each point must be a one-dimensional sequence of numbers")
    dim = len(dataset[0])
    for i, point in enumerate(dataset):
        if np.ndim(point) != 1 or len(point) != dim:
            raise InconsistentDimension(
                f"Point {i} has shape {np.shape(point)}, expected ({dim},) like the first point"
            )

    X = np.array(dataset, dtype=np.float64)
    X.setflags(write=False)
    return X


def count_distinct(X: np.ndarray) -> int:
    """Number of distinct rows in X."""
    return len(np.unique(X, axis=0))


def check_n_clusters(n_clusters, X: np.ndarray) -> int:
    """
    Make sure ``n_clusters`` distinct seeds can be drawn from X.

    Raises:
        InvalidConfiguration: n_clusters is not a positive integer
        InsufficientDistinctPoints: X has fewer distinct points than n_clusters
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, numbers.Integral):
        raise InvalidConfiguration(f"n_clusters must be an integer, got {n_clusters!r}")
    if n_clusters <= 0:
        raise InvalidConfiguration(f"n_clusters must be positive, got {n_clusters}")
    if n_clusters > len(X):
        raise InsufficientDistinctPoints(
            f"n_clusters={n_clusters} exceeds the number of points ({len(X)})"
        )
    n_distinct = count_distinct(X)
    if n_clusters > n_distinct:
        raise InsufficientDistinctPoints(
            f"n_clusters={n_clusters} exceeds the number of distinct points ({n_distinct})"
        )
    return int(n_clusters)


class CentroidSampler:
    """
    Draws dataset points to be used as centroids.

    Args:
        X: Validated dataset of shape (n_samples, n_features)
        rng: Random source exposing ``integers(high)``
    """

    def __init__(self, X: np.ndarray, rng) -> None:
        self.X = X
        self.rng = rng
        # Rejected draws in a row before falling back to the eligible pool
        self.max_attempts = len(X)

    def _is_taken(self, idx: int, taken: Sequence[np.ndarray]) -> bool:
        return any(np.array_equal(self.X[idx], t) for t in taken)

    def draw(self, taken: Sequence[np.ndarray]) -> int:
        """
        Return the index of a point equal to none of ``taken``.

        Raises:
            InsufficientDistinctPoints: every point is already taken
        """
        n_samples = len(self.X)
        for _ in range(self.max_attempts):
            idx = int(self.rng.integers(n_samples))
            if not self._is_taken(idx, taken):
                return idx

        eligible = [i for i in range(n_samples) if not self._is_taken(i, taken)]
        if not eligible:
            raise InsufficientDistinctPoints(
                f"No point left that differs from the {len(taken)} current centroids"
            )
        return eligible[int(self.rng.integers(len(eligible)))]

    def initial(self, n_clusters: int) -> List[int]:
        """Indices of ``n_clusters`` distinct seed points."""
        chosen: List[int] = []
        for _ in range(n_clusters):
            chosen.append(self.draw([self.X[i] for i in chosen]))
        return chosen

    def reseed(self, centroids: np.ndarray, cluster: int) -> int:
        """Index of a replacement point for ``cluster``, avoiding the other centroids."""
        others = [centroids[c] for c in range(len(centroids)) if c != cluster]
        return self.draw(others)
