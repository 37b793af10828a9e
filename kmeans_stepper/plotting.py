import numpy as np
from matplotlib import pyplot as plt
from loguru import logger

from kmeans_stepper.data import UNASSIGNED


# ================================
# Frame of one session state
# ================================
def plot_state(state, cfg, ax=None):
    """Draws points and centroids of a state on a matplotlib axis and returns the axis."""
    if ax is None:
        _, ax = plt.subplots(figsize=tuple(cfg.snapshot.figsize))

    render = cfg.render
    palette = list(render.palette)
    point_colors = [render.unassigned_color if label == UNASSIGNED else palette[label]
                    for label in state.labels]

    ax.scatter(state.points[:, 0], state.points[:, 1], c=point_colors,
               s=(2 * render.point_radius) ** 2, edgecolors=render.point_outline, linewidths=1, zorder=2)
    ax.scatter(state.centroids[:, 0], state.centroids[:, 1], c=palette[:state.num_clusters],
               s=(2 * render.centroid_radius) ** 2, edgecolors=render.centroid_outline,
               linewidths=render.centroid_outline_width, zorder=3)

    ax.set_xlim(cfg.data.low, cfg.data.high)
    ax.set_ylim(cfg.data.low, cfg.data.high)
    ax.set_aspect("equal")
    title = f"Iteration {state.iteration}"
    if state.converged:
        title += " (converged)"
    ax.set_title(title)
    return ax


# ================================
# Save to disk
# ================================
def save_snapshot(state, cfg, path):
    fig, ax = plt.subplots(figsize=tuple(cfg.snapshot.figsize))
    plot_state(state, cfg, ax=ax)
    fig.tight_layout()
    fig.savefig(path, dpi=cfg.snapshot.dpi)
    plt.close(fig)
    logger.info(f"Snapshot of iteration {state.iteration} saved to {path}")
    return path


def plot_trace(states, cfg):
    """One panel per state, side by side; used to compare consecutive iterations."""
    fig, axes = plt.subplots(1, len(states), figsize=(4 * len(states), 4), squeeze=False)
    for ax, state in zip(np.ravel(axes), states):
        plot_state(state, cfg, ax=ax)
    fig.tight_layout()
    return fig
