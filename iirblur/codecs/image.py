"""Conversions between pixel buffers, numpy arrays and Pillow images."""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..core.errors import InvalidImageError


class ImageCodec:
    """Convert images to and from the [H, W, C] uint8 layout the engine uses.

    Raw buffers are row-major and channel-interleaved, so
    ``len(data) == width * height * channels``.
    """

    DEFAULT_MODE = "RGBA"

    @classmethod
    def from_buffer(
        cls,
        data: Union[bytes, bytearray, memoryview, np.ndarray],
        width: int,
        height: int,
        channels: int = 4,
    ) -> np.ndarray:
        """Wrap a raw interleaved 8-bit buffer as an [H, W, C] array (copied)."""
        if width <= 0 or height <= 0 or channels <= 0:
            raise InvalidImageError(
                f"width, height and channels must be positive, got {width}x{height}x{channels}"
            )
        if isinstance(data, np.ndarray):
            if data.dtype != np.uint8:
                raise InvalidImageError(f"buffer must be uint8, got {data.dtype}")
            arr = np.ascontiguousarray(data).ravel()
        else:
            arr = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * channels
        if arr.size != expected:
            raise InvalidImageError(
                f"buffer has {arr.size} bytes, expected {expected} for {width}x{height}x{channels}"
            )
        return arr.reshape(height, width, channels).copy()

    @classmethod
    def to_buffer(cls, image: np.ndarray) -> bytes:
        """Flatten an image back into interleaved bytes."""
        return np.ascontiguousarray(image, dtype=np.uint8).tobytes()

    @classmethod
    def from_pil(cls, img: Image.Image, mode: str = DEFAULT_MODE) -> np.ndarray:
        if img.mode != mode:
            img = img.convert(mode)
        return np.array(img, dtype=np.uint8)

    @classmethod
    def to_pil(cls, image: np.ndarray) -> Image.Image:
        if image.ndim == 3 and image.shape[2] == 1:
            image = image[:, :, 0]
        return Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8))

    @classmethod
    def load(cls, path: Union[str, Path], mode: str = DEFAULT_MODE) -> np.ndarray:
        """Load an image file as uint8 [H, W, C]."""
        with Image.open(path) as img:
            return cls.from_pil(img, mode)

    @classmethod
    def save(cls, path: Union[str, Path], image: np.ndarray) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        img = cls.to_pil(image)
        # JPEG has no alpha channel
        if path.suffix.lower() in (".jpg", ".jpeg") and img.mode == "RGBA":
            img = img.convert("RGB")
        img.save(path)
