#!/usr/bin/env python3
"""
Speed test for the pruned K-means implementation
"""

import time
import numpy as np
from sklearn.cluster import KMeans
from sklearn.datasets import make_blobs

from fast_kmeans import FastKMeans

def speed_test_kmeans():
    """Compare pruned K-means work against exhaustive assignment and scikit-learn."""
    print("🚀 K-means Speed Test - Pruned vs Exhaustive Assignment")
    print("=" * 60)

    # Test configurations
    test_configs = [
        {'n_samples': 1000, 'n_features': 2, 'n_clusters': 10},
        {'n_samples': 5000, 'n_features': 8, 'n_clusters': 20},
        {'n_samples': 10000, 'n_features': 16, 'n_clusters': 50},
    ]

    for config in test_configs:
        print(f"\nTest: {config['n_samples']} samples, {config['n_features']} features, {config['n_clusters']} clusters")
        print("-" * 50)

        X, _ = make_blobs(
            n_samples=config['n_samples'],
            n_features=config['n_features'],
            centers=config['n_clusters'],
            random_state=42
        )

        print("Testing pruned K-means...")
        start_time = time.time()

        model = FastKMeans(X, n_clusters=config['n_clusters'], random_state=42)
        model.fit()

        elapsed_time = time.time() - start_time
        stats = model.get_stats()
        saved = 1.0 - stats['n_distance_evals'] / stats['exhaustive_distance_evals']

        print(f"✅ Completed in {elapsed_time:.2f} seconds")
        print(f"   Final inertia: {model.inertia_:.2f}")
        print(f"   Iterations: {model.n_iter_} (converged: {model.converged_})")
        print(f"   Distance evaluations: {stats['n_distance_evals']} vs {stats['exhaustive_distance_evals']} exhaustive")
        print(f"   Pruned away: {saved:.1%}")
        print(f"   Reassignments: {stats['n_reassignments']}, reseeds: {stats['n_reseeds']}, audit corrections: {stats['n_audit_corrections']}")

        # Reference run
        start_time = time.time()
        reference = KMeans(n_clusters=config['n_clusters'], n_init=1, random_state=42).fit(X)
        reference_time = time.time() - start_time
        print(f"   scikit-learn KMeans: inertia {reference.inertia_:.2f} in {reference_time:.2f}s")

if __name__ == "__main__":
    speed_test_kmeans()

    print("\n🎉 Speed test completed!")
