"""Convolution kernels and fixed color-transform matrices."""

import math
from dataclasses import dataclass

import numpy as np

from ..utils.image_utils import InvalidParameterError, validate_kernel_size

# Rows produce R, G, B, A from an RGBA column vector
SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189, 0.0],
    [0.349, 0.686, 0.168, 0.0],
    [0.272, 0.534, 0.131, 0.0],
    [0.0, 0.0, 0.0, 1.0],
], dtype=np.float32)
SEPIA_MATRIX.flags.writeable = False


@dataclass(frozen=True, eq=False)
class Kernel:
    """Square convolution kernel; ``weights`` sum to 1."""
    size: int
    weights: np.ndarray

    @property
    def middle(self) -> int:
        return self.size // 2


def gaussian_kernel(size: int) -> Kernel:
    """
    Normalized ``size x size`` Gaussian with sigma = size / 6.

    Weight at (i, j) is exp(-((i-m)^2 + (j-m)^2) / (2 sigma^2)) / (2 pi sigma^2)
    with m = size // 2, divided by the sum of all weights.
    """
    size = validate_kernel_size(size)
    sigma = size / 6.0
    middle = size // 2

    offsets = np.arange(size, dtype=np.float64) - middle
    squared = offsets[:, np.newaxis] ** 2 + offsets[np.newaxis, :] ** 2
    weights = np.exp(-squared / (2.0 * sigma * sigma)) / (2.0 * math.pi * sigma * sigma)
    weights /= weights.sum()
    weights.flags.writeable = False
    return Kernel(size=size, weights=weights)


def sepia_matrix(channels: int) -> np.ndarray:
    """Sepia transform sized for 3-channel RGB or 4-channel RGBA samples."""
    if channels == 4:
        return SEPIA_MATRIX.copy()
    if channels == 3:
        return SEPIA_MATRIX[:3, :3].copy()
    raise InvalidParameterError(f"Sepia needs 3 or 4 channels, got {channels}")
