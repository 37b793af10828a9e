import numpy as np
from loguru import logger


def distance(a, b):
    """Euclidean distance between two 2-D points."""
    return np.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)


def assign_clusters(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Assigns each point to the nearest centroid. On a tie the lower index wins."""
    labels = np.zeros(len(points), dtype=int)
    for i, point in enumerate(points):
        best_j = 0
        best_d = np.inf
        for j, centroid in enumerate(centroids):
            d = distance(point, centroid)
            if d < best_d:  # strict: a later equal distance never overwrites
                best_d = d
                best_j = j
        labels[i] = best_j
    return labels


def update_centroids(points: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Returns the new centroids as the mean of their assigned points.
    A cluster without points keeps its previous coordinates.
    """
    new_centroids = centroids.copy()
    for i in range(len(centroids)):
        cluster_points = points[labels == i]
        if len(cluster_points) == 0:
            logger.debug(f"Cluster {i} is empty, keeping centroid at {tuple(centroids[i])}")
            continue
        new_centroids[i] = cluster_points.mean(axis=0)
    return new_centroids


def iterate(points: np.ndarray, centroids: np.ndarray):
    """One Lloyd iteration: assignment, then centroid update."""
    labels = assign_clusters(points, centroids)
    return labels, update_centroids(points, labels, centroids)


def cluster_sizes(labels: np.ndarray, num_clusters: int) -> list:
    return [int(np.sum(labels == i)) for i in range(num_clusters)]
