"""
Configuration module for affine transforms.

Holds the cleanup tolerance and display format, loaded from YAML files.
Values are passed explicitly to Transform.fix() and Transform.format();
nothing here changes module-level state.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass
import logging

from .transform import EPSILON, Transform

logger = logging.getLogger(__name__)


@dataclass
class TransformConfig:
    """
    Tunable parameters for transform cleanup and display.

    Attributes:
        epsilon: Entries with a smaller magnitude are snapped to 0.0 by fix()
        precision: Number of decimals shown per entry
        padding: Extra characters added to the widest entry when aligning
    """
    epsilon: float = EPSILON
    precision: int = 3
    padding: int = 2

    def __post_init__(self):
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {self.epsilon}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.padding < 0:
            raise ValueError(f"padding must be >= 0, got {self.padding}")

    def fix(self, transform: Transform) -> None:
        """Clean `transform` in place using the configured epsilon."""
        transform.fix(self.epsilon)

    def format(self, transform: Transform) -> str:
        return transform.format(self.precision, self.padding)

    @classmethod
    def from_yaml(cls, config_path: str) -> "TransformConfig":
        """
        Load configuration from a YAML file.

        Missing keys keep their defaults.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            TransformConfig with loaded parameters

        Example YAML structure:
            epsilon: 1.0e-8
            display:
              precision: 3
              padding: 2
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loading configuration from {config_path}")

        display = data.get('display', {})
        return cls(
            epsilon=float(data.get('epsilon', EPSILON)),
            precision=int(display.get('precision', 3)),
            padding=int(display.get('padding', 2)),
        )

    def to_yaml(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        data = {
            'epsilon': self.epsilon,
            'display': {
                'precision': self.precision,
                'padding': self.padding,
            },
        }

        with open(config_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {config_path}")
