"""BlurEngine: recursive Gaussian blur of 8-bit images."""

import logging
from typing import Optional

import numpy as np
import torch

from .config import BlurConfig, BlurParams, DEFAULT_STEPS, check_sigma, check_steps
from .errors import InvalidImageError, BlurCancelled
from .recursive import gaussian_iir_2d

logger = logging.getLogger(__name__)


def _check_image(image) -> np.ndarray:
    if not isinstance(image, np.ndarray):
        raise InvalidImageError(f"image must be a numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"image must be uint8, got {image.dtype}")
    if image.ndim not in (2, 3):
        raise InvalidImageError(f"image must be [H, W] or [H, W, C], got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImageError(f"image must have non-zero width and height, got shape {image.shape}")
    if image.ndim == 3 and image.shape[2] == 0:
        raise InvalidImageError("image must have at least one channel")
    return image


class BlurEngine:
    """Separable recursive Gaussian blur.

    Each channel (alpha included) is copied into a float64 scratch buffer
    normalized to [0, 1], swept horizontally then vertically, gain-corrected
    and written back with truncation to uint8.
    """

    def __init__(self, cfg: Optional[BlurConfig] = None, steps: Optional[int] = None):
        self.cfg = cfg or BlurConfig()
        self.steps = check_steps(self.cfg.steps if steps is None else steps)
        self.device = torch.device(self.cfg.device)

    @torch.no_grad()
    def blur(
        self,
        sigma_x: float,
        sigma_y: float,
        image: np.ndarray,
        steps: Optional[int] = None,
        cancel=None,
    ) -> np.ndarray:
        """Blur an image.

        Args:
            sigma_x: horizontal spread, 0 disables the horizontal pass
            sigma_y: vertical spread, 0 disables the vertical pass
            image: [H, W, C] or [H, W] uint8 array, not modified
            steps: sweep pairs per axis (engine default if None)
            cancel: optional object with ``is_set()``, checked before each channel

        Returns:
            new uint8 array with the same shape as ``image``
        """
        sigma_x = check_sigma("sigma_x", sigma_x)
        sigma_y = check_sigma("sigma_y", sigma_y)
        steps = self.steps if steps is None else check_steps(steps)
        image = _check_image(image)

        if sigma_x == 0 and sigma_y == 0:
            return image.copy()

        planar = image if image.ndim == 3 else image[:, :, None]
        height, width, channels = planar.shape
        out = np.empty_like(planar)
        buf = torch.empty((height, width), dtype=torch.float64, device=self.device)

        logger.debug(
            "blur %dx%dx%d sigma=(%g, %g) steps=%d on %s",
            width, height, channels, sigma_x, sigma_y, steps, self.device,
        )

        for c in range(channels):
            if cancel is not None and cancel.is_set():
                raise BlurCancelled(f"blur cancelled before channel {c}")
            src = torch.from_numpy(np.ascontiguousarray(planar[:, :, c]))
            buf.copy_(src.to(self.device, torch.float64) / 255.0)
            gaussian_iir_2d(buf, sigma_x, sigma_y, steps)
            # saturating cast: clamp to [0, 255], truncate toward zero
            values = (buf * 255.0).clamp(0.0, 255.0).nan_to_num(0.0)
            out[:, :, c] = values.cpu().numpy().astype(np.uint8)

        return out if image.ndim == 3 else out[:, :, 0]

    def blur_params(self, image: np.ndarray, params: BlurParams, cancel=None) -> np.ndarray:
        params.validate()
        return self.blur(params.sigma_x, params.sigma_y, image, steps=params.steps, cancel=cancel)


def blur(sigma_x: float, sigma_y: float, image: np.ndarray, steps: int = DEFAULT_STEPS) -> np.ndarray:
    """Blur ``image`` with a default CPU engine."""
    return BlurEngine(steps=steps).blur(sigma_x, sigma_y, image)
