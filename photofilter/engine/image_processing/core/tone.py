from dataclasses import dataclass
from typing import Optional

import numpy as np

from .pixel_buffer import PixelBuffer
from ..configs.processing_config import FilterProcessingConfig
from ..utils.image_utils import timing_decorator, validate_buffer, validate_range, saturate_uint8, logger

CONTRAST_RANGE = FilterProcessingConfig.CONTRAST_RANGE
BRIGHTNESS_RANGE = FilterProcessingConfig.BRIGHTNESS_RANGE


@dataclass(frozen=True)
class ToneParams:
    """Contrast factor and brightness offset (as a fraction of 255)."""
    contrast: float = 1.0
    brightness: float = 0.0

    def __post_init__(self):
        validate_range("contrast", self.contrast, CONTRAST_RANGE)
        validate_range("brightness", self.brightness, BRIGHTNESS_RANGE)

    @property
    def is_identity(self) -> bool:
        return self.contrast == 1.0 and self.brightness == 0.0


class ToneAdjuster:
    """
    Linear tone adjustments: ``out = clamp(in * contrast + brightness * 255)``.

    Always apply these to the unfiltered original so repeated slider moves do
    not compound. Alpha is left untouched.
    """
    
    def __init__(self, config: Optional[FilterProcessingConfig] = None):
        self.config = config or FilterProcessingConfig()
        logger.info("Initialized ToneAdjuster")
    
    def _scale(self, buffer: PixelBuffer, alpha: float, beta: float) -> PixelBuffer:
        result = buffer.to_array()
        color = min(buffer.channels, 3)
        scaled = result[:, :, :color].astype(np.float32) * alpha + beta
        result[:, :, :color] = saturate_uint8(scaled)
        return PixelBuffer(result)
    
    @timing_decorator
    def adjust_contrast(self, buffer: PixelBuffer, contrast: float) -> PixelBuffer:
        validate_buffer(buffer)
        contrast = validate_range("contrast", contrast, self.config.CONTRAST_RANGE)
        return self._scale(buffer, contrast, 0.0)
    
    @timing_decorator
    def adjust_brightness(self, buffer: PixelBuffer, brightness: float) -> PixelBuffer:
        validate_buffer(buffer)
        brightness = validate_range("brightness", brightness, self.config.BRIGHTNESS_RANGE)
        return self._scale(buffer, 1.0, brightness * 255.0)
    
    @timing_decorator
    def apply(self, buffer: PixelBuffer, params: ToneParams) -> PixelBuffer:
        """Contrast and brightness in one pass; identity params return a copy."""
        validate_buffer(buffer)
        if params.is_identity:
            return buffer.copy()
        contrast = validate_range("contrast", params.contrast, self.config.CONTRAST_RANGE)
        brightness = validate_range("brightness", params.brightness, self.config.BRIGHTNESS_RANGE)
        return self._scale(buffer, contrast, brightness * 255.0)
