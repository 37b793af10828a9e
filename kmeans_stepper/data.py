import numpy as np

from kmeans_stepper.errors import InvalidConfiguration

UNASSIGNED = -1


def generate_points(num_points: int, rng: np.random.Generator, low: float = -1.0, high: float = 1.0) -> np.ndarray:
    """Returns a (num_points, 2) array, x and y drawn independently and uniformly from [low, high]."""
    if num_points <= 0:
        raise InvalidConfiguration(f"num_points must be positive, got {num_points}")
    return rng.uniform(low, high, size=(num_points, 2))


def unassigned_labels(num_points: int) -> np.ndarray:
    return np.full(num_points, UNASSIGNED, dtype=int)


def sample_without_replacement(population_size: int, k: int, rng: np.random.Generator) -> np.ndarray:
    """Draws k distinct indices from range(population_size), each subset equally likely."""
    if k <= 0:
        raise InvalidConfiguration(f"Cannot sample {k} items")
    if population_size < k:
        raise InvalidConfiguration(
            f"Cannot sample {k} distinct items from a population of {population_size}")
    return rng.choice(population_size, size=k, replace=False)


def initialize_centroids(points: np.ndarray, num_clusters: int, rng: np.random.Generator) -> np.ndarray:
    """
    Picks num_clusters distinct points at random and returns a copy of their
    coordinates, so later centroid updates never touch the points themselves.
    """
    indices = sample_without_replacement(len(points), num_clusters, rng)
    return points[indices].copy()
