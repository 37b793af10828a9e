from enum import Enum
from dataclasses import dataclass, field, replace

import numpy as np
from loguru import logger

from kmeans_stepper import data, kmean
from kmeans_stepper.errors import InvalidConfiguration


class Phase(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ITERATED = "iterated"


@dataclass(frozen=True, eq=False)
class KMeansState:
    """
    Snapshot of one session: the points, their cluster labels, the centroids
    and how many iterations produced them. step() never modifies a state in
    place, it returns the next one.
    """
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))
    labels: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=int))
    centroids: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))
    iteration: int = 0
    phase: Phase = Phase.UNINITIALIZED
    converged: bool = False

    @property
    def num_points(self):
        return len(self.points)

    @property
    def num_clusters(self):
        return len(self.centroids)


def make_rng(seed=None) -> np.random.Generator:
    return np.random.default_rng(seed)


def initialize(cfg, rng: np.random.Generator) -> KMeansState:
    """Generates the points, picks the initial centroids and returns an INITIALIZED state."""
    num_points = cfg.data.num_points
    num_clusters = cfg.data.num_clusters
    if num_points <= 0 or num_clusters <= 0 or num_points < num_clusters:
        raise InvalidConfiguration(
            f"Need 0 < num_clusters <= num_points, got {num_clusters} clusters for {num_points} points")

    points = data.generate_points(num_points, rng, cfg.data.low, cfg.data.high)
    centroids = data.initialize_centroids(points, num_clusters, rng)
    logger.info(f"Session initialized with {num_points} points and {num_clusters} clusters")
    logger.debug(f"Initial centroids: {centroids.round(4).tolist()}")

    return KMeansState(
        points=points,
        labels=data.unassigned_labels(num_points),
        centroids=centroids,
        iteration=0,
        phase=Phase.INITIALIZED,
    )


def from_arrays(points, centroids) -> KMeansState:
    """Builds an INITIALIZED state from explicit coordinates (copied)."""
    points = np.array(points, dtype=float).reshape(-1, 2)
    centroids = np.array(centroids, dtype=float).reshape(-1, 2)
    if len(centroids) == 0 or len(points) < len(centroids):
        raise InvalidConfiguration(
            f"Need 0 < num_clusters <= num_points, got {len(centroids)} clusters for {len(points)} points")
    return KMeansState(
        points=points,
        labels=data.unassigned_labels(len(points)),
        centroids=centroids,
        phase=Phase.INITIALIZED,
    )


def has_converged(previous: KMeansState, current: KMeansState, tol: float = 1e-9) -> bool:
    """True when no label changed and no centroid moved by more than tol."""
    if previous.phase is Phase.UNINITIALIZED or current.phase is Phase.UNINITIALIZED:
        return False
    if not np.array_equal(previous.labels, current.labels):
        return False
    return bool(np.all(np.abs(previous.centroids - current.centroids) <= tol))


def step(state: KMeansState, tol: float = 1e-9) -> KMeansState:
    """Runs exactly one assignment + update and returns the resulting state."""
    if state.phase is Phase.UNINITIALIZED:
        raise InvalidConfiguration("Cannot iterate an uninitialized session")

    labels, centroids = kmean.iterate(state.points, state.centroids)
    next_state = replace(
        state,
        labels=labels,
        centroids=centroids,
        iteration=state.iteration + 1,
        phase=Phase.ITERATED,
    )
    converged = has_converged(state, next_state, tol)
    next_state = replace(next_state, converged=converged)

    sizes = kmean.cluster_sizes(labels, state.num_clusters)
    logger.info(f"Iteration {next_state.iteration}: cluster sizes {sizes}")
    logger.debug(f"Centroids: {centroids.round(4).tolist()}")
    if converged and not state.converged:
        logger.info(f"Centroids stable after iteration {next_state.iteration}")
    return next_state


def reset(cfg, rng: np.random.Generator) -> KMeansState:
    logger.info("Resetting session")
    return initialize(cfg, rng)
