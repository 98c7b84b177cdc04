import cv2
import numpy as np
from enum import Enum
from typing import Optional, Tuple, Union

from .pixel_buffer import PixelBuffer
from ..configs.processing_config import FilterProcessingConfig
from ..utils.image_utils import InvalidParameterError, timing_decorator, validate_buffer, logger


class FlipAxis(Enum):
    """Mirror axis, valued with the matching ``cv2.flip`` code"""
    HORIZONTAL = 1  # left <-> right
    VERTICAL = 0  # top <-> bottom
    BOTH = -1

    @classmethod
    def parse(cls, value: Union["FlipAxis", str]) -> "FlipAxis":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise InvalidParameterError(f"Unknown flip axis: {value!r}") from None


def rotation_matrix(center: Tuple[float, float], angle: float, scale: float = 1.0) -> np.ndarray:
    """
    2x3 affine matrix rotating ``angle`` degrees counter-clockwise about ``center``.

    cos/sin values within 1e-12 of zero are snapped to 0 so quarter turns map
    pixel centers exactly onto pixel centers.
    """
    matrix = cv2.getRotationMatrix2D(center, angle, scale)
    linear = matrix[:, :2]
    linear[np.abs(linear) < 1e-12] = 0.0
    return matrix


class GeometricEngine:
    """Rotation, flipping and cropping"""
    
    def __init__(self, config: Optional[FilterProcessingConfig] = None):
        self.config = config or FilterProcessingConfig()
        logger.info("Initialized GeometricEngine")
    
    @timing_decorator
    def rotate(self, buffer: PixelBuffer, angle: Optional[float] = None) -> PixelBuffer:
        """
        Rotate about the pixel-grid center onto a canvas of the same size.

        Content rotated past the canvas is clipped; uncovered corners are
        filled with ``ROTATION_BACKGROUND`` (transparent black for RGBA).
        """
        validate_buffer(buffer)
        if angle is None:
            angle = self.config.ROTATION_ANGLE
        
        width, height = buffer.width, buffer.height
        center = ((width - 1) / 2.0, (height - 1) / 2.0)
        matrix = rotation_matrix(center, float(angle))
        background = (self.config.ROTATION_BACKGROUND,) * 4
        
        rotated = cv2.warpAffine(
            buffer.to_array(), matrix, (width, height),
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=background
        )
        return PixelBuffer(rotated.reshape(buffer.shape))
    
    @timing_decorator
    def flip(self, buffer: PixelBuffer, axis: Union[FlipAxis, str, None] = None) -> PixelBuffer:
        """Mirror along ``axis``; flipping twice restores the input exactly."""
        validate_buffer(buffer)
        axis = FlipAxis.parse(axis if axis is not None else self.config.FLIP_AXIS)
        
        flipped = cv2.flip(buffer.to_array(), axis.value)
        return PixelBuffer(flipped.reshape(buffer.shape))
    
    @timing_decorator
    def crop(self, buffer: PixelBuffer, x: int, y: int, width: int, height: int) -> PixelBuffer:
        """Copy out the ``width x height`` region whose top-left corner is (x, y)."""
        validate_buffer(buffer)
        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Crop size must be positive, got {width}x{height}")
        if x < 0 or y < 0 or x + width > buffer.width or y + height > buffer.height:
            raise InvalidParameterError(
                f"Crop region ({x}, {y}, {width}, {height}) exceeds "
                f"{buffer.width}x{buffer.height} buffer"
            )
        
        return PixelBuffer.from_array(buffer.pixels[y:y + height, x:x + width])
