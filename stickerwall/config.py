"""
Wall Configuration

Collects the tunable constants of the wall: layout spacing, clamping
margins, culling buffer and z-band reservations. Defaults reproduce the
stock corkboard; a YAML file can override any subset of them.
"""

import logging
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SEED = 12345


@dataclass
class WallConfig:
    """Tunable constants for layout, clamping and rendering decisions."""

    # Layout engine
    seed: int = DEFAULT_SEED
    base_offset: float = 100.0  # y of the first auto-placed row
    vertical_spacing: float = 350.0  # distance between auto-placed rows
    horizontal_range_fraction: float = 0.6  # share of board width used for spread
    primary_perturbation: float = 100.0
    secondary_perturbation: float = 50.0
    vertical_jitter: float = 30.0  # +/- jitter applied to each row
    max_rotation: float = 4.0  # degrees, symmetric

    # Bounds
    bound_margin: float = 50.0
    default_board_width: float = 800.0
    board_width_fraction: float = 0.6667  # board takes 2/3 of the window

    # Board height
    min_board_height: float = 1500.0
    board_height_per_item: float = 400.0
    board_height_padding: float = 300.0

    # Fallback placement for new items
    fallback_spacing: float = 350.0
    fallback_floor: float = 100.0
    click_padding: float = 50.0

    # Rendering
    cull_buffer: float = 200.0
    interaction_z: int = 1000
    index_threshold: int = 64
    default_viewport_height: float = 800.0

    # Row virtualization
    virtual_item_height: float = 350.0
    virtual_padding: float = 100.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = (int,) if isinstance(f.default, int) else (int, float)
            if isinstance(value, bool) or not isinstance(value, expected):
                kind = "an integer" if expected == (int,) else "a number"
                raise ValueError(f"{f.name} must be {kind}, got {value!r}")

        positive = (
            "vertical_spacing",
            "default_board_width",
            "board_width_fraction",
            "virtual_item_height",
            "default_viewport_height",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

        non_negative = (
            "bound_margin",
            "cull_buffer",
            "vertical_jitter",
            "max_rotation",
            "horizontal_range_fraction",
            "virtual_padding",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")

    def board_width_from_window(self, window_width: Optional[float]) -> float:
        """Board width for a reported window width.

        Missing, zero or negative widths (detached environment) fall back to
        ``default_board_width``.
        """
        if not window_width or window_width <= 0:
            logger.debug(f"No window width reported, using default board width {self.default_board_width}")
            return self.default_board_width
        return window_width * self.board_width_fraction

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WallConfig":
        """Create from a (possibly partial) dictionary of overrides."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")

        return cls(**data)


def load_config(path: Union[str, Path]) -> WallConfig:
    """
    Load a wall configuration from a YAML file.

    Args:
        path: Path to a YAML mapping of overrides

    Returns:
        WallConfig with the file's values applied over the defaults
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Wall configuration file not found: {config_path}")

    if config_path.is_symlink():
        raise ValueError(f"Wall configuration file cannot be a symlink: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in wall configuration {config_path}: {e}") from e

    config = WallConfig.from_dict(data)
    logger.info(f"Loaded wall configuration from {config_path}")
    return config
