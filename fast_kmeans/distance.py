"""
Distance helpers shared by the clustering engine.

The engine never assumes a particular metric; it only relies on symmetry and
the triangle inequality. ``euclidean_distance`` is used when no metric is
injected.
"""

from typing import Callable, Optional, Tuple

import numpy as np

DistanceFunc = Callable[[np.ndarray, np.ndarray], float]


def euclidean_distance(x: np.ndarray, y: np.ndarray) -> float:
    """L2 distance between two vectors."""
    return float(np.linalg.norm(x - y))


def nearest_centroid(
    point: np.ndarray,
    centroids: np.ndarray,
    distance_func: DistanceFunc
) -> Tuple[int, float]:
    """
    Scan every centroid and return the closest one.

    Ties are broken by the first index encountered.

    Args:
        point: Query vector of shape (n_features,)
        centroids: Centroid matrix of shape (n_clusters, n_features)
        distance_func: Metric used for the scan

    Returns:
        (centroid_id, distance)
    """
    best_id = -1
    best_dist = float('inf')
    for c_id in range(len(centroids)):
        d = distance_func(point, centroids[c_id])
        if d < best_dist:
            best_dist = d
            best_id = c_id
    return best_id, best_dist


def assign_exhaustive(
    X: np.ndarray,
    centroids: np.ndarray,
    distance_func: DistanceFunc
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Brute-force nearest-centroid assignment for every row of X.

    Returns:
        (labels, distances) arrays of shape (n_samples,)
    """
    n_samples = len(X)
    labels = np.zeros(n_samples, dtype=np.intp)
    distances = np.zeros(n_samples, dtype=np.float64)
    for i in range(n_samples):
        labels[i], distances[i] = nearest_centroid(X[i], centroids, distance_func)
    return labels, distances


def compute_inertia(
    X: np.ndarray,
    labels: np.ndarray,
    centroids: np.ndarray,
    distance_func: Optional[DistanceFunc] = None
) -> float:
    """
    Within-cluster sum of squared distances.

    Squared Euclidean distances unless ``distance_func`` is given, in which
    case its distances are squared and summed instead.
    """
    assigned_centroids = centroids[labels]
    if distance_func is None:
        squared_distances = np.sum((X - assigned_centroids) ** 2, axis=1)
    else:
        squared_distances = np.array([distance_func(x, c) ** 2 for x, c in zip(X, assigned_centroids)])
    return float(np.sum(squared_distances))
