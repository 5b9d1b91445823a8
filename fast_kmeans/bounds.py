"""
Per-point distance bounds and the live assignment.
"""

from typing import Callable

import numpy as np


class BoundTracker:
    """
    Upper bound, lower bound and assigned cluster for every point.

    - ``upper[i]`` is the distance from point i to its assigned centroid as of
      the last time the point was visited. A point is only examined when its
      centroid comes strictly closer than this value.
    - ``lower[i]`` is the threshold an alternative centroid has to beat
      before point i is moved to it.

    Args:
        n_points: Number of points in the dataset
    """

    def __init__(self, n_points: int) -> None:
        self.upper = np.full(n_points, np.inf)
        self.lower = np.full(n_points, np.inf)
        self.assignments = np.zeros(n_points, dtype=np.intp)

    def initialize(self, X: np.ndarray, centroids: np.ndarray, distance_func: Callable) -> None:
        """
        Assign every point to its nearest centroid and derive both bounds.

        The nearest centroid gives the assignment and the upper bound, the
        nearest of the remaining ones gives the lower bound. With a single
        centroid the lower bound stays at infinity.
        """
        for i in range(len(X)):
            distances = np.array([distance_func(X[i], c) for c in centroids])
            first_id = int(np.argmin(distances))
            second_dist = np.min(np.delete(distances, first_id)) if len(distances) > 1 else np.inf
            self.reset(i, first_id, distances[first_id], second_dist)

    def reset(self, i: int, cluster: int, upper: float, lower: float) -> None:
        self.assignments[i] = cluster
        self.upper[i] = upper
        self.lower[i] = lower

    def tighten(self, i: int, distance: float) -> bool:
        """
        Refresh the bounds of point i with the exact distance to its centroid.

        Returns True when the centroid moved strictly closer, i.e. when the
        point has to be examined this round.
        """
        if distance < self.upper[i]:
            self.upper[i] = distance
            # An alternative is only worth taking if it beats the current centroid
            self.lower[i] = min(self.lower[i], distance)
            return True
        self.upper[i] = distance
        return False

    def reassign(self, i: int, cluster: int, distance: float) -> None:
        """Move point i to ``cluster`` at the given distance."""
        self.assignments[i] = cluster
        self.upper[i] = distance
        self.lower[i] = distance

    def invalidate(self) -> None:
        """Force every point to be examined on the next pass."""
        self.upper.fill(np.inf)
        self.lower.fill(np.inf)
