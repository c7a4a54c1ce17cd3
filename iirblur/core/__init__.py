"""iirblur core: recursive Gaussian blur engine."""

from .config import BlurConfig, BlurParams, DEFAULT_STEPS
from .engine import BlurEngine, blur
from .errors import (
    BlurError,
    InvalidImageError,
    InvalidSigmaError,
    InvalidStepsError,
    BlurCancelled,
)
from .recursive import gen_coefficients, gaussian_iir_2d, post_scale

__all__ = [
    "BlurConfig",
    "BlurParams",
    "DEFAULT_STEPS",
    "BlurEngine",
    "blur",
    "BlurError",
    "InvalidImageError",
    "InvalidSigmaError",
    "InvalidStepsError",
    "BlurCancelled",
    "gen_coefficients",
    "gaussian_iir_2d",
    "post_scale",
]
