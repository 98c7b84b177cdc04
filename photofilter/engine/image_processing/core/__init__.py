"""
Core filter engine modules

This package contains the pixel-transform engine:
- Pixel buffer representation
- Color space conversion and kernel math
- Color filters, tone adjustment and geometric transforms
- Dispatch from a requested operation to the engine call
"""

from .pixel_buffer import PixelBuffer
from .color_space import ensure_color, hsv_to_rgb, merge_channels, rgb_to_hsv, split_channels
from .kernel_math import Kernel, SEPIA_MATRIX, gaussian_kernel, sepia_matrix
from .filters import FilterEngine, convolve_interior
from .tone import ToneAdjuster, ToneParams
from .geometry import FlipAxis, GeometricEngine, rotation_matrix
from .dispatcher import FilterDispatcher, FilterKind, ModificationKind

__all__ = [
    'PixelBuffer',
    'ensure_color',
    'hsv_to_rgb',
    'merge_channels',
    'rgb_to_hsv',
    'split_channels',
    'Kernel',
    'SEPIA_MATRIX',
    'gaussian_kernel',
    'sepia_matrix',
    'FilterEngine',
    'convolve_interior',
    'ToneAdjuster',
    'ToneParams',
    'FlipAxis',
    'GeometricEngine',
    'rotation_matrix',
    'FilterDispatcher',
    'FilterKind',
    'ModificationKind',
]
