"""Blur configuration."""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Any, Optional, Union
import math

import yaml

from .errors import InvalidSigmaError, InvalidStepsError


DEFAULT_STEPS = 4


def check_sigma(name: str, sigma: float) -> float:
    """Return sigma as float, raising InvalidSigmaError if unusable."""
    try:
        value = float(sigma)
    except (TypeError, ValueError):
        raise InvalidSigmaError(f"{name} must be a real number, got {sigma!r}")
    if not math.isfinite(value):
        raise InvalidSigmaError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidSigmaError(f"{name} must be >= 0, got {value}")
    return value


def check_steps(steps: int) -> int:
    try:
        value = int(steps)
    except (TypeError, ValueError, OverflowError):
        raise InvalidStepsError(f"steps must be a positive integer, got {steps!r}")
    if isinstance(steps, bool) or value != steps or value < 1:
        raise InvalidStepsError(f"steps must be a positive integer, got {steps!r}")
    return value


@dataclass
class BlurParams:
    """Parameters for a single blur call.

    A sigma of exactly 0 disables filtering on that axis.
    """
    sigma_x: float
    sigma_y: float
    steps: int = DEFAULT_STEPS

    def validate(self) -> "BlurParams":
        self.sigma_x = check_sigma("sigma_x", self.sigma_x)
        self.sigma_y = check_sigma("sigma_y", self.sigma_y)
        self.steps = check_steps(self.steps)
        return self

    @property
    def is_identity(self) -> bool:
        return self.sigma_x == 0 and self.sigma_y == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BlurParams":
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)


@dataclass
class BlurConfig:
    """Engine and tooling defaults.

    ``sigma_x``/``sigma_y`` are only used when a caller (CLI, batch manifest)
    does not supply its own values. The 8.0 default matches the banner blur
    the engine was written for.
    """
    steps: int = DEFAULT_STEPS
    device: str = "cpu"
    sigma_x: float = 8.0
    sigma_y: float = 8.0
    workers: int = 1
    skip_existing: bool = True

    def params(self, sigma_x: Optional[float] = None, sigma_y: Optional[float] = None) -> BlurParams:
        """Build BlurParams, falling back to the configured sigmas."""
        return BlurParams(
            sigma_x=self.sigma_x if sigma_x is None else sigma_x,
            sigma_y=self.sigma_y if sigma_y is None else sigma_y,
            steps=self.steps,
        ).validate()

    def validate(self) -> "BlurConfig":
        self.steps = check_steps(self.steps)
        self.sigma_x = check_sigma("sigma_x", self.sigma_x)
        self.sigma_y = check_sigma("sigma_y", self.sigma_y)
        if int(self.workers) < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        self.workers = int(self.workers)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BlurConfig":
        return cls(**d).validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BlurConfig":
        """Load config from YAML.

        Either a flat mapping of fields or a mapping with a ``blur`` section::

            blur:
              sigma_x: 4.0
              sigma_y: 4.0
              steps: 6
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if "blur" in data:
            data = data["blur"] or {}
        return cls.from_dict(data)
