"""Recursive Gaussian primitives: coefficients, sweeps, gain correction."""

import logging
import math
from typing import Tuple

import torch

logger = logging.getLogger(__name__)


def gen_coefficients(sigma: float, steps: int) -> Tuple[float, float]:
    """Closed-form (lambda, dnu) for one axis.

    Args:
        sigma: standard deviation along the axis, must be > 0
        steps: number of forward/backward sweep pairs

    Returns:
        (lambda, dnu)
    """
    lam = (sigma * sigma) / (2.0 * steps)
    dnu = (1.0 + 2.0 * lam - math.sqrt(1.0 + 4.0 * lam)) / (2.0 * lam)
    return lam, dnu


def sweep_rows(buf: torch.Tensor, dnu: float, steps: int) -> None:
    """Filter every row of a [H, W] buffer in place.

    Rows are independent, so each column index is updated for all rows at
    once; along a row the recurrence stays sequential.
    """
    width = buf.shape[1]
    for _ in range(steps):
        # rightwards
        for x in range(1, width):
            buf[:, x] += dnu * buf[:, x - 1]
        # leftwards
        for x in range(width - 1, 0, -1):
            buf[:, x - 1] += dnu * buf[:, x]


def sweep_cols(buf: torch.Tensor, dnu: float, steps: int) -> None:
    """Filter every column of a [H, W] buffer in place."""
    height = buf.shape[0]
    for _ in range(steps):
        # downwards
        for y in range(1, height):
            buf[y] += dnu * buf[y - 1]
        # upwards
        for y in range(height - 1, 0, -1):
            buf[y - 1] += dnu * buf[y]


def post_scale(lambda_x: float, dnu_x: float, lambda_y: float, dnu_y: float, steps: int) -> float:
    """Gain correction applied once to the combined 2D result."""
    return (math.sqrt(dnu_x * dnu_y) / math.sqrt(lambda_x * lambda_y)) ** (2 * steps)


def gaussian_iir_2d(buf: torch.Tensor, sigma_x: float, sigma_y: float, steps: int) -> torch.Tensor:
    """Blur a single-channel [H, W] buffer in place and return it.

    An axis with sigma == 0 is skipped and contributes lambda = dnu = 1 to
    the gain correction. Edges are not padded.
    """
    if sigma_x > 0:
        lambda_x, dnu_x = gen_coefficients(sigma_x, steps)
        sweep_rows(buf, dnu_x, steps)
    else:
        lambda_x, dnu_x = 1.0, 1.0

    if sigma_y > 0:
        lambda_y, dnu_y = gen_coefficients(sigma_y, steps)
        sweep_cols(buf, dnu_y, steps)
    else:
        lambda_y, dnu_y = 1.0, 1.0

    scale = post_scale(lambda_x, dnu_x, lambda_y, dnu_y, steps)
    logger.debug(
        "iir pass: lambda=(%.6g, %.6g) dnu=(%.6g, %.6g) post_scale=%.6g",
        lambda_x, lambda_y, dnu_x, dnu_y, scale,
    )
    buf.mul_(scale)
    return buf
