import numpy as np
import pytest

from fast_kmeans import (
    EmptyDataset,
    FastKMeans,
    InconsistentDimension,
    InsufficientDistinctPoints,
    InvalidConfiguration,
)
from fast_kmeans.seeding import CentroidSampler, check_dataset, check_random_state


class ScriptedRandom:
    """Random source that replays a fixed list of indices."""

    def __init__(self, picks):
        self._picks = list(picks)
        self.calls = 0

    def integers(self, high):
        pick = self._picks[min(self.calls, len(self._picks) - 1)]
        self.calls += 1
        assert 0 <= pick < high
        return pick


def test_sampler_rejects_points_equal_to_chosen_centroid():
    X = check_dataset([[0.0, 0.0], [0.0, 0.0], [1.0, 1.0]])
    sampler = CentroidSampler(X, ScriptedRandom([0, 1, 2]))
    # index 1 is a different point with the same value as index 0
    assert sampler.initial(2) == [0, 2]


def test_sampler_falls_back_to_eligible_pool():
    X = check_dataset([[0.0, 0.0], [1.0, 1.0]])
    rng = ScriptedRandom([0])
    sampler = CentroidSampler(X, rng)
    assert sampler.draw([X[0]]) == 1
    # n rejected draws, then one draw among the eligible indices
    assert rng.calls == len(X) + 1


def test_sampler_raises_when_every_point_is_taken():
    X = check_dataset([[0.0, 0.0], [1.0, 1.0]])
    sampler = CentroidSampler(X, np.random.default_rng(0))
    with pytest.raises(InsufficientDistinctPoints):
        sampler.draw([X[0], X[1]])


def test_reseed_avoids_other_centroids():
    X = check_dataset([[0.0], [1.0], [2.0]])
    centroids = np.array([[0.0], [5.0], [2.0]])
    sampler = CentroidSampler(X, ScriptedRandom([0, 2, 1]))
    assert sampler.reseed(centroids, 1) == 1


def test_seeds_are_distinct_dataset_points():
    rng = np.random.default_rng(3)
    X = rng.integers(0, 4, size=(40, 2)).astype(float)
    model = FastKMeans(X, n_clusters=6, random_state=11)
    model.run()
    seeds = X[model.seed_indices_]
    assert len(np.unique(seeds, axis=0)) == 6


def test_check_random_state():
    assert isinstance(check_random_state(None), np.random.Generator)
    assert isinstance(check_random_state(5), np.random.Generator)
    gen = np.random.default_rng(1)
    assert check_random_state(gen) is gen
    with pytest.raises(InvalidConfiguration):
        check_random_state("seed")


def test_check_dataset_is_read_only_float64():
    X = check_dataset([[1, 2], [3, 4]])
    assert X.dtype == np.float64
    assert X.shape == (2, 2)
    with pytest.raises(ValueError):
        X[0, 0] = 9.0


@pytest.mark.parametrize("k", [0, -1])
def test_non_positive_k(k):
    with pytest.raises(InvalidConfiguration):
        FastKMeans([[0.0, 0.0], [1.0, 1.0]], n_clusters=k)


@pytest.mark.parametrize("k", [2.5, "3", True, None])
def test_non_integer_k(k):
    with pytest.raises(InvalidConfiguration):
        FastKMeans([[0.0, 0.0], [1.0, 1.0]], n_clusters=k)


def test_k_larger_than_dataset():
    with pytest.raises(InsufficientDistinctPoints):
        FastKMeans([[0.0], [1.0], [2.0]], n_clusters=4)
    # Also reported as a configuration error
    with pytest.raises(InvalidConfiguration):
        FastKMeans([[0.0], [1.0], [2.0]], n_clusters=4)


def test_identical_points():
    with pytest.raises(InsufficientDistinctPoints):
        FastKMeans([[1.0, 1.0]] * 5, n_clusters=2)


def test_fewer_distinct_points_than_k():
    X = [[0.0, 0.0], [0.0, 0.0], [1.0, 1.0], [1.0, 1.0]]
    with pytest.raises(InsufficientDistinctPoints):
        FastKMeans(X, n_clusters=3)
    FastKMeans(X, n_clusters=2, random_state=0).run()


@pytest.mark.parametrize("dataset", [[], np.empty((0, 3))])
def test_empty_dataset(dataset):
    with pytest.raises(EmptyDataset):
        FastKMeans(dataset, n_clusters=1)


@pytest.mark.parametrize("dataset", [
    [[0.0, 0.0], [1.0]],
    [[0.0, 0.0], [1.0, 2.0, 3.0]],
    [1.0, 2.0, 3.0],
    [[0.0, 0.0], [[1.0, 2.0]]],
])
def test_inconsistent_dimension(dataset):
    with pytest.raises(InconsistentDimension):
        FastKMeans(dataset, n_clusters=1)


@pytest.mark.parametrize("kwargs", [
    {'max_iters': 0},
    {'tol': -1.0},
    {'neighbor_radius': 0.0},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidConfiguration):
        FastKMeans([[0.0], [1.0]], n_clusters=1, **kwargs)
