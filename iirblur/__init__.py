"""iirblur: recursive (IIR) separable Gaussian blur for 8-bit images.

Main components:
- core: Blur engine (BlurConfig, BlurParams, BlurEngine)
- codecs: Pixel buffer / Pillow conversions
- generators: CSV manifest writing and batch blurring
- metrics: Fidelity against exact Gaussian convolution
"""

from .core import (
    BlurConfig,
    BlurParams,
    BlurEngine,
    blur,
    gen_coefficients,
    gaussian_iir_2d,
    post_scale,
    BlurError,
    InvalidImageError,
    InvalidSigmaError,
    InvalidStepsError,
    BlurCancelled,
    DEFAULT_STEPS,
)
from .codecs import ImageCodec
from .imaging import blur_image, blur_file
from .generators import ManifestGenerator, BatchBlurGenerator

__version__ = "0.1.0"
__all__ = [
    # Core
    "BlurConfig",
    "BlurParams",
    "BlurEngine",
    "blur",
    "gen_coefficients",
    "gaussian_iir_2d",
    "post_scale",
    "DEFAULT_STEPS",
    # Errors
    "BlurError",
    "InvalidImageError",
    "InvalidSigmaError",
    "InvalidStepsError",
    "BlurCancelled",
    # Codecs
    "ImageCodec",
    "blur_image",
    "blur_file",
    # Generators
    "ManifestGenerator",
    "BatchBlurGenerator",
]
