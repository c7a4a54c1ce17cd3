"""Fidelity of the recursive filter against true Gaussian convolution."""

from typing import Dict

import numpy as np
import torch
from scipy.ndimage import gaussian_filter

from .core import BlurEngine, DEFAULT_STEPS
from .core.config import check_sigma, check_steps
from .core.errors import InvalidSigmaError
from .core.recursive import gen_coefficients, sweep_rows, post_scale


def reference_blur(image: np.ndarray, sigma_x: float, sigma_y: float) -> np.ndarray:
    """Exact Gaussian blur with zero padding and the same 8-bit truncation.

    Args:
        image: [H, W, C] or [H, W] uint8
        sigma_x, sigma_y: spreads, 0 leaves that axis alone

    Returns:
        uint8 array, same shape as image
    """
    if sigma_x == 0 and sigma_y == 0:
        return image.copy()

    planar = image if image.ndim == 3 else image[:, :, None]
    out = np.empty_like(planar)
    for c in range(planar.shape[2]):
        chan = planar[:, :, c].astype(np.float64) / 255.0
        chan = gaussian_filter(chan, sigma=(sigma_y, sigma_x), mode="constant", cval=0.0, truncate=6.0)
        out[:, :, c] = np.clip(chan * 255.0, 0.0, 255.0).astype(np.uint8)
    return out if image.ndim == 3 else out[:, :, 0]


def approximation_error(
    image: np.ndarray,
    sigma_x: float,
    sigma_y: float,
    steps: int = DEFAULT_STEPS,
    border: int = 0,
) -> Dict[str, float]:
    """Compare the recursive blur to ``reference_blur``.

    ``border`` pixels on every side are ignored, which hides the edge
    falloff of the unpadded recursion.
    """
    approx = BlurEngine(steps=steps).blur(sigma_x, sigma_y, image).astype(np.float64)
    exact = reference_blur(image, sigma_x, sigma_y).astype(np.float64)
    if border > 0:
        approx = approx[border:-border, border:-border]
        exact = exact[border:-border, border:-border]
    if approx.size == 0:
        raise ValueError(f"border {border} leaves no pixels to compare")

    diff = np.abs(approx - exact)
    mse = float(np.mean(diff ** 2))
    psnr = float("inf") if mse == 0 else float(10.0 * np.log10(255.0 ** 2 / mse))
    return {"mae": float(diff.mean()), "max_abs": float(diff.max()), "psnr": psnr}


@torch.no_grad()
def impulse_response(sigma: float, steps: int = DEFAULT_STEPS, length: int = 101) -> np.ndarray:
    """1D impulse response of the recursive filter, gain-corrected.

    The impulse sits in the middle of ``length`` samples. Far from the
    edges the response sums to ~1 and has variance ~sigma**2.
    """
    sigma = check_sigma("sigma", sigma)
    steps = check_steps(steps)
    if sigma == 0:
        raise InvalidSigmaError("sigma must be > 0 for an impulse response")
    buf = torch.zeros((1, length), dtype=torch.float64)
    buf[0, length // 2] = 1.0
    lam, dnu = gen_coefficients(sigma, steps)
    sweep_rows(buf, dnu, steps)
    # one axis only: the other contributes lambda = dnu = 1
    buf.mul_(post_scale(lam, dnu, 1.0, 1.0, steps))
    return buf[0].numpy()
