import re
from pathlib import Path
from typing import Optional, Sequence

import yaml
from loguru import logger
from omegaconf import OmegaConf, DictConfig
from omegaconf.errors import OmegaConfBaseException

from kmeans_stepper.errors import InvalidConfiguration

CONFIG_FILE = Path(__file__).resolve().parent / "config" / "config.yaml"

_HEX_COLOR = re.compile(r"^#?[0-9a-fA-F]{6}$")

INTEGER_KEYS = (
    "data.num_points", "data.num_clusters",
    "render.width", "render.height", "render.toolbar_height", "render.fps",
    "render.point_radius", "render.centroid_radius", "render.centroid_outline_width",
)
NUMBER_KEYS = ("data.low", "data.high", "convergence.tol")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def load_config(config_path: Optional[str] = None, overrides: Optional[Sequence[str]] = None) -> DictConfig:
    """
    Load the packaged defaults, merge an optional user YAML file on top and
    then any dotlist overrides (e.g. ["data.num_points=50"]).
    The merged config is validated before it is returned.
    """
    cfg = OmegaConf.load(CONFIG_FILE)

    try:
        if config_path is not None:
            path = Path(config_path)
            if not path.is_file():
                raise InvalidConfiguration(f"Config file not found: {path}")
            logger.debug(f"Merging user config from {path}")
            cfg = OmegaConf.merge(cfg, OmegaConf.load(path))

        if overrides:
            logger.debug(f"Applying overrides: {list(overrides)}")
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))

        OmegaConf.resolve(cfg)
    except (OmegaConfBaseException, yaml.YAMLError) as e:
        raise InvalidConfiguration(f"Could not load config: {e}") from e
    validate_config(cfg)
    return cfg


def validate_config(cfg: DictConfig) -> None:
    for key in INTEGER_KEYS:
        value = OmegaConf.select(cfg, key)
        if not _is_int(value):
            raise InvalidConfiguration(f"{key} must be an integer, got {value!r}")
    for key in NUMBER_KEYS:
        value = OmegaConf.select(cfg, key)
        if not _is_number(value):
            raise InvalidConfiguration(f"{key} must be a number, got {value!r}")
    seed = cfg.data.seed
    if seed is not None and not _is_int(seed):
        raise InvalidConfiguration(f"data.seed must be an integer or null, got {seed!r}")

    num_points = cfg.data.num_points
    num_clusters = cfg.data.num_clusters

    if num_points <= 0 or num_clusters <= 0:
        raise InvalidConfiguration(
            f"num_points and num_clusters must be positive, got {num_points} and {num_clusters}")
    if num_points < num_clusters:
        raise InvalidConfiguration(
            f"num_points ({num_points}) must be >= num_clusters ({num_clusters})")
    if not cfg.data.low < cfg.data.high:
        raise InvalidConfiguration(f"Empty domain [{cfg.data.low}, {cfg.data.high}]")

    palette = list(cfg.render.palette)
    if len(palette) < num_clusters:
        raise InvalidConfiguration(
            f"Palette has {len(palette)} colors but {num_clusters} clusters are configured")
    for color in palette + [cfg.render.unassigned_color, cfg.render.background]:
        if not _HEX_COLOR.match(str(color)):
            raise InvalidConfiguration(f"Not a hex color: {color!r}")

    if cfg.render.width <= 0 or cfg.render.height <= 0:
        raise InvalidConfiguration(
            f"Window size must be positive, got {cfg.render.width}x{cfg.render.height}")
    if cfg.convergence.tol < 0:
        raise InvalidConfiguration(f"convergence.tol must be >= 0, got {cfg.convergence.tol}")
    if str(cfg.logging.level).upper() not in LOG_LEVELS:
        raise InvalidConfiguration(f"Unknown logging.level {cfg.logging.level!r}")
    if not isinstance(cfg.logging.format, str) or not isinstance(cfg.logging.colorize, bool):
        raise InvalidConfiguration("logging.format must be a string and logging.colorize a boolean")


def hex_to_rgb(hex_color):
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def scale(value, input_min, input_max, output_min, output_max):
    """Linearly map value from [input_min, input_max] onto [output_min, output_max]."""
    input_range = input_max - input_min
    output_range = output_max - output_min
    return (((value - input_min) * output_range) / input_range) + output_min


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)
