import sys
import argparse

from loguru import logger

from kmeans_stepper import session, kmean
from kmeans_stepper.errors import InvalidConfiguration
from kmeans_stepper.logger import setup_logger, setup_library_logger
from kmeans_stepper.utils import load_config, LOG_LEVELS


def build_parser():
    parser = argparse.ArgumentParser(
        prog="kmeans-stepper",
        description="Step through k-means on random 2-D points, one iteration per click.")
    parser.add_argument("--config", default=None, help="YAML file merged over the packaged defaults.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for point generation and centroid picks.")
    parser.add_argument("--points", type=int, default=None, help="Number of points (data.num_points).")
    parser.add_argument("--clusters", type=int, default=None, help="Number of clusters (data.num_clusters).")
    parser.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                        help="Config override, e.g. --set render.width=800. Repeatable.")
    parser.add_argument("--headless", action="store_true", help="Run without opening a window.")
    parser.add_argument("--steps", type=int, default=0, help="Iterations to run before showing / exiting.")
    parser.add_argument("--snapshot", default=None, help="Optional path to save a PNG of the final state.")
    parser.add_argument("--trace", default=None, help="Optional path to save a PNG with every iteration.")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Overrides logging.level from the config.")
    return parser


def collect_overrides(args):
    overrides = list(args.overrides)
    if args.seed is not None:
        overrides.append(f"data.seed={args.seed}")
    if args.points is not None:
        overrides.append(f"data.num_points={args.points}")
    if args.clusters is not None:
        overrides.append(f"data.num_clusters={args.clusters}")
    return overrides


def run_headless(cfg, rng, steps):
    """Runs `steps` iterations without a window and returns every state, initial one first."""
    states = [session.initialize(cfg, rng)]
    for _ in range(steps):
        states.append(session.step(states[-1], cfg.convergence.tol))
    final = states[-1]
    sizes = kmean.cluster_sizes(final.labels, final.num_clusters) if final.iteration else []
    logger.info(f"Finished {final.iteration} iterations, cluster sizes {sizes}, converged={final.converged}")
    for i, (x, y) in enumerate(final.centroids):
        logger.info(f"  └─ Centroid {i}: ({x:.4f}, {y:.4f})")
    return states


def run_interactive(cfg, rng, steps):
    from kmeans_stepper.controller import IterationController
    from kmeans_stepper.render import View

    view = View(cfg)
    try:
        controller = IterationController(cfg, view, rng)
        controller.start()
        for _ in range(steps):
            controller.advance()
        controller.run()
    finally:
        view.close()
    return controller.history


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config, collect_overrides(args))
    except InvalidConfiguration as e:
        setup_logger("ERROR")
        logger.error(f"Invalid configuration: {e}")
        return 2

    setup_logger(args.log_level or cfg.logging.level, cfg.logging.format, cfg.logging.colorize)
    setup_library_logger("matplotlib")
    setup_library_logger("PIL")

    if args.steps < 0:
        logger.error("--steps must be >= 0")
        return 2

    rng = session.make_rng(cfg.data.seed)
    if args.headless:
        states = run_headless(cfg, rng, args.steps)
    else:
        states = run_interactive(cfg, rng, args.steps)
    final = states[-1]

    if args.snapshot:
        from kmeans_stepper.plotting import save_snapshot
        save_snapshot(final, cfg, args.snapshot)
    if args.trace:
        from kmeans_stepper.plotting import plot_trace
        from matplotlib import pyplot as plt
        fig = plot_trace(states, cfg)
        fig.savefig(args.trace, dpi=cfg.snapshot.dpi)
        plt.close(fig)
        logger.info(f"Trace of {len(states)} states saved to {args.trace}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
