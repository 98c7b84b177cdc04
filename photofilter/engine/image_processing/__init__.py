"""
Pixel-transform engine

Deterministic, stateless image operations over in-memory 8-bit buffers:
grayscale, negative, median and Gaussian blur, sepia, contrast and brightness,
rotation and flipping. Every call returns a new buffer.
"""

from .core.dispatcher import FilterDispatcher, FilterKind, ModificationKind
from .core.pixel_buffer import PixelBuffer
from .core.tone import ToneParams
from .configs.processing_config import FilterProcessingConfig

__all__ = [
    'FilterDispatcher',
    'FilterKind',
    'ModificationKind',
    'PixelBuffer',
    'ToneParams',
    'FilterProcessingConfig',
]

__version__ = '1.0.0'
