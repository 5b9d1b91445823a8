from __future__ import annotations

from typing import Dict, Iterator, List, Set

import numpy as np


class NeighborGraph(object):
    """Cluster adjacency used to limit reassignment checks.

    Two levels of data are kept:

    - a neighbor record per point: the cluster ids that were recently close
      enough to that point to matter. Every record starts out holding all
      cluster ids, so the very first pass examines every other cluster.
    - a neighbor list per cluster: the union of the records of the points
      currently assigned to the cluster, without the cluster itself. It is
      rebuilt once per iteration by :meth:`rebuild` and read through
      ``graph[cluster_id]``.

    Args:
        n_points (int): Number of points in the dataset.
        n_clusters (int): Number of clusters.
    """

    def __init__(self, n_points: int, n_clusters: int) -> None:
        self.n_clusters = n_clusters
        self._records: List[Set[int]] = [set(range(n_clusters)) for _ in range(n_points)]
        # self._graph[c] is a sorted list of cluster ids adjacent to c
        self._graph: Dict[int, List[int]] = {c: [] for c in range(n_clusters)}

    def __getitem__(self, cluster: int) -> List[int]:
        """Neighbor list of a cluster, in scan order."""
        return self._graph[cluster]

    def __len__(self) -> int:
        return len(self._graph)

    def __iter__(self) -> Iterator[int]:
        return iter(self._graph)

    def record(self, point: int) -> Set[int]:
        """Neighbor record of a point."""
        return self._records[point]

    def reset_record(self, point: int) -> None:
        """Go back to the bootstrap record: every cluster is a neighbor."""
        self._records[point] = set(range(self.n_clusters))

    def rebuild(self, assignments: np.ndarray) -> None:
        """Recompute every cluster's neighbor list from the current assignment.

        Args:
            assignments: Cluster id of every point.
        """
        unions: Dict[int, Set[int]] = {c: set() for c in range(self.n_clusters)}
        for point, cluster in enumerate(assignments):
            unions[int(cluster)].update(self._records[point])
        for cluster, neighbors in unions.items():
            neighbors.discard(cluster)
            self._graph[cluster] = sorted(neighbors)

    def add_cluster(self, cluster: int) -> None:
        """Make ``cluster`` a neighbor of every other cluster and of every point.

        Used when a centroid is reseeded, so that points anywhere can move
        to it.
        """
        for c, neighbors in self._graph.items():
            if c != cluster and cluster not in neighbors:
                neighbors.append(cluster)
                neighbors.sort()
        for r in self._records:
            r.add(cluster)
