"""iirblur Generators: manifest writing and batch blurring."""

from .manifest_generator import ManifestGenerator
from .batch_generator import BatchBlurGenerator

__all__ = ["ManifestGenerator", "BatchBlurGenerator"]
