"""
Exceptions raised when a clustering run cannot be configured.

All of them are raised up front by the constructor, before any centroid is
seeded, so a failed call never leaves partial state behind.
"""


class FastKMeansError(ValueError):
    """Base class for all fast_kmeans validation errors."""


class InvalidConfiguration(FastKMeansError):
    """A parameter (usually the number of clusters) is out of range."""


class InsufficientDistinctPoints(InvalidConfiguration):
    """There are fewer distinct points than requested clusters."""


class EmptyDataset(FastKMeansError):
    """The dataset contains no points."""


class InconsistentDimension(FastKMeansError):
    """A point does not have the same length as the first point."""
