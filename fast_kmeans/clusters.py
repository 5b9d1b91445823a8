"""
Conversion of a final assignment vector into the output partition.
"""

from typing import Dict, List, Sequence


def extract_clusters(assignments: Sequence[int]) -> List[List[int]]:
    """
    Group point indices by cluster id.

    Clusters are ordered by the first point that belongs to them and clusters
    without points are left out, so the result may hold fewer than
    ``n_clusters`` entries.

    Args:
        assignments: Cluster id of every point

    Returns:
        List of clusters, each an ascending list of point indices
    """
    clusters: Dict[int, List[int]] = {}
    for point_id, cluster_id in enumerate(assignments):
        clusters.setdefault(int(cluster_id), []).append(point_id)
    return list(clusters.values())
