"""Pillow-facing helpers around BlurEngine."""

from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .codecs import ImageCodec
from .core import BlurEngine, BlurParams


def blur_image(
    img: Image.Image,
    sigma_x: float,
    sigma_y: float,
    steps: Optional[int] = None,
    engine: Optional[BlurEngine] = None,
) -> Image.Image:
    """Blur a Pillow image. Any mode is converted to RGBA first.

    ``steps=None`` uses the engine default.
    """
    engine = engine or BlurEngine(steps=steps)
    data = ImageCodec.from_pil(img, "RGBA")
    return ImageCodec.to_pil(engine.blur(sigma_x, sigma_y, data, steps=steps))


def blur_file(
    src: Union[str, Path],
    dst: Union[str, Path],
    params: BlurParams,
    engine: Optional[BlurEngine] = None,
) -> None:
    """Load ``src``, blur it and write the result to ``dst``."""
    engine = engine or BlurEngine(steps=params.steps)
    data = ImageCodec.load(src)
    ImageCodec.save(dst, engine.blur_params(data, params))
