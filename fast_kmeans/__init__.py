"""
fast_kmeans - accelerated k-means clustering
============================================

K-means that keeps per-point distance bounds and a cluster neighbor graph,
so most points are not compared against every centroid on every iteration.

Main components:
- FastKMeans: the clustering engine
- Pluggable distance function (Euclidean by default)
- Injectable random source for reproducible seeding

Example:
--------
    >>> from fast_kmeans import FastKMeans
    >>> import numpy as np
    >>>
    >>> data = np.random.random((1000, 10))
    >>> model = FastKMeans(data, n_clusters=8, random_state=42)
    >>> clusters = model.run()
    >>> model.labels_[:10]
"""

from .version import __version__
from .kmeans import FastKMeans
from .clusters import extract_clusters
from .distance import euclidean_distance
from .exceptions import (
    FastKMeansError,
    InvalidConfiguration,
    InsufficientDistinctPoints,
    EmptyDataset,
    InconsistentDimension,
)

__all__ = [
    'FastKMeans',
    'extract_clusters',
    'euclidean_distance',
    'FastKMeansError',
    'InvalidConfiguration',
    'InsufficientDistinctPoints',
    'EmptyDataset',
    'InconsistentDimension',
    '__version__',
]
