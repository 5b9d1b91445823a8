import numpy as np
import pytest
from sklearn.cluster import KMeans
from sklearn.datasets import make_blobs
from sklearn.metrics import adjusted_rand_score

from fast_kmeans import FastKMeans


@pytest.mark.parametrize("random_state", [0, 1, 2])
def test_fixed_point_matches_sklearn_lloyd(random_state):
    X, _ = make_blobs(n_samples=400, centers=5, n_features=8, cluster_std=0.8, random_state=random_state)

    fast = FastKMeans(X, n_clusters=5, random_state=random_state).fit()
    assert fast.converged_

    # Started from our centroids, Lloyd's algorithm should not move anything
    full = KMeans(n_clusters=5, init=fast.cluster_centers_, n_init=1, max_iter=300)
    full.fit(X)

    assert adjusted_rand_score(full.labels_, fast.labels_) == 1.0
    assert np.allclose(full.cluster_centers_, fast.cluster_centers_, atol=1e-8)
    assert np.isclose(full.inertia_, fast.inertia_, rtol=1e-6)


def test_inertia_close_to_sklearn():
    X, _ = make_blobs(n_samples=600, centers=3, n_features=16, cluster_std=0.5, random_state=42)

    full = KMeans(n_clusters=3, n_init=5, max_iter=200, random_state=42).fit(X)
    # Best of several seeds, the way n_init restarts work
    best = min(
        (FastKMeans(X, n_clusters=3, random_state=seed).fit() for seed in range(30)),
        key=lambda model: model.inertia_
    )

    rel_diff = (best.inertia_ - full.inertia_) / full.inertia_
    assert rel_diff < 0.05, f"FastKMeans inertia too high relative to full KMeans: rel_diff={rel_diff:.3f}"


def test_pruning_saves_distance_evaluations():
    X, _ = make_blobs(n_samples=3000, centers=30, n_features=2, cluster_std=0.5, random_state=7)
    model = FastKMeans(X, n_clusters=30, random_state=7).fit()
    stats = model.get_stats()
    assert model.converged_
    assert stats['n_distance_evals'] < stats['exhaustive_distance_evals']
