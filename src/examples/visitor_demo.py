"""
Running the clustering visitors the way a host engine does.

This example demonstrates:
1. K-means on a column of floats, with a seeded random source
2. Affinity propagation on the same column, letting the exemplar count emerge
3. Vector-valued elements with a Euclidean distance

Each visitor is driven through pre(), the call with (index, column), post(),
then get_result() and get_clusters().
"""

import numpy as np
import torch

# Add parent directory to path
import sys
sys.path.append('..')

from colcluster import KMeansVisitor, AffinityPropagationVisitor, squared_euclidean


def generate_column(n_per_group=20, centers=(0.0, 8.0, 20.0), spread=0.8, random_state=42):
    """Scalar column made of well separated groups."""
    gen = np.random.default_rng(random_state)
    values = np.concatenate([gen.normal(c, spread, size=n_per_group) for c in centers])
    gen.shuffle(values)
    return values.tolist()


def visit(visitor, index, column):
    visitor.pre()
    visitor(index, column)
    visitor.post()
    return visitor.get_result(), visitor.get_clusters(index, column)


def main():
    column = generate_column()
    index = list(range(len(column)))

    print("=" * 60)
    print("K-means (K=3)")
    print("=" * 60)
    kmeans = KMeansVisitor(n_clusters=3, max_iter=50, random_state=0, verbose=1)
    centroids, clusters = visit(kmeans, index, column)
    for cluster in clusters:
        print(f"  centroid {float(cluster.representative):7.3f}: {len(cluster)} elements")
    print(f"  inertia: {kmeans.inertia_:.3f} after {kmeans.n_iter_} iterations")

    print()
    print("=" * 60)
    print("Affinity propagation")
    print("=" * 60)
    affinity = AffinityPropagationVisitor(max_iter=100, damping=0.9, verbose=1)
    exemplars, clusters = visit(affinity, index, column)
    print(f"  {len(exemplars)} exemplars at positions {exemplars.indices}")
    for cluster in clusters:
        print(f"  exemplar {float(cluster.representative):7.3f}: {len(cluster)} elements")

    print()
    print("=" * 60)
    print("Vector elements")
    print("=" * 60)
    torch.manual_seed(0)
    points = torch.cat([torch.randn(25, 2) * 0.3, torch.randn(25, 2) * 0.3 + 4.0])
    kmeans = KMeansVisitor(n_clusters=2, max_iter=50, distance=squared_euclidean)
    centroids, clusters = visit(kmeans, range(len(points)), points)
    for centroid, size in zip(centroids, clusters.sizes()):
        print(f"  centroid {centroid.tolist()}: {size} elements")


if __name__ == "__main__":
    main()
