import cv2
import numpy as np
from scipy.signal import correlate2d
from typing import Optional

from .color_space import ensure_color, hsv_to_rgb, merge_channels, rgb_to_hsv, split_channels
from .kernel_math import Kernel, gaussian_kernel, sepia_matrix
from .pixel_buffer import PixelBuffer
from ..configs.processing_config import FilterProcessingConfig
from ..utils.image_utils import (
    timing_decorator, validate_buffer, validate_kernel_size, saturate_uint8, logger
)


def convolve_interior(plane: np.ndarray, kernel: Kernel) -> np.ndarray:
    """
    Convolve a single 2-D channel, computing only pixels whose whole window
    lies inside the image. The band of width ``kernel.middle`` along every
    edge stays 0.
    """
    height, width = plane.shape
    middle = kernel.middle
    result = np.zeros((height, width), dtype=np.uint8)
    if height < kernel.size or width < kernel.size:
        return result

    # Gaussian kernels are symmetric, so correlation and convolution agree
    interior = correlate2d(plane.astype(np.float64), kernel.weights, mode='valid')
    result[middle:height - middle, middle:width - middle] = saturate_uint8(interior)
    return result


class FilterEngine:
    """Color filters: grayscale, negative, median blur, Gaussian blur and sepia"""
    
    def __init__(self, config: Optional[FilterProcessingConfig] = None):
        self.config = config or FilterProcessingConfig()
        logger.info("Initialized FilterEngine")
    
    @timing_decorator
    def grayscale(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Plain channel average, ``floor((R + G + B) / 3)``, not luma weighted.
        Returns a single-channel buffer.
        """
        validate_buffer(buffer)
        if buffer.channels == 1:
            return buffer.copy()
        
        rgb = buffer.pixels[:, :, :3].astype(np.uint16)
        gray = (rgb.sum(axis=2) // 3).astype(np.uint8)
        return PixelBuffer(gray)
    
    @timing_decorator
    def negative(self, buffer: PixelBuffer) -> PixelBuffer:
        """255 - value for each color channel; alpha passes through."""
        validate_buffer(buffer)
        result = buffer.to_array()
        color = min(buffer.channels, 3)
        result[:, :, :color] = 255 - result[:, :, :color]
        return PixelBuffer(result)
    
    @timing_decorator
    def median_blur(self, buffer: PixelBuffer, kernel_size: Optional[int] = None) -> PixelBuffer:
        """
        Per-channel median over a square window with replicated edges.

        The requested size is honored unless ``LEGACY_FIXED_MEDIAN_WINDOW`` is
        set, in which case the window is always 5x5.
        """
        validate_buffer(buffer)
        if kernel_size is None:
            kernel_size = self.config.MEDIAN_KERNEL_SIZE
        kernel_size = validate_kernel_size(kernel_size, minimum=3)
        
        if self.config.LEGACY_FIXED_MEDIAN_WINDOW:
            if kernel_size != self.config.LEGACY_MEDIAN_WINDOW:
                logger.debug(f"Legacy median window in use, ignoring requested size {kernel_size}")
            kernel_size = self.config.LEGACY_MEDIAN_WINDOW
        
        blurred = cv2.medianBlur(buffer.to_array(), kernel_size)
        return PixelBuffer(blurred.reshape(buffer.shape))
    
    @timing_decorator
    def gaussian_blur(self, buffer: PixelBuffer, kernel_size: Optional[int] = None) -> PixelBuffer:
        """
        Blur each HSV channel with a ``kernel_size`` Gaussian, then convert back.

        Only pixels whose full window fits inside the image are filtered; the
        ``kernel_size // 2`` wide border comes out black. Alpha passes through.
        """
        validate_buffer(buffer)
        if kernel_size is None:
            kernel_size = self.config.GAUSSIAN_KERNEL_SIZE
        kernel_size = validate_kernel_size(kernel_size)
        
        color = ensure_color(buffer)
        if color.height < kernel_size or color.width < kernel_size:
            # No pixel has a full window, so the whole image is border band
            logger.debug(f"{color.width}x{color.height} image has no interior for a {kernel_size}x{kernel_size} kernel")
            rgb = PixelBuffer.blank(color.width, color.height)
        else:
            kernel = gaussian_kernel(kernel_size)
            hsv_planes = split_channels(rgb_to_hsv(color))
            blurred_planes = [
                PixelBuffer(convolve_interior(plane.pixels[:, :, 0], kernel))
                for plane in hsv_planes
            ]
            rgb = hsv_to_rgb(merge_channels(blurred_planes))
        
        if color.channels == 4:
            result = np.dstack([rgb.pixels, color.pixels[:, :, 3]])
            return PixelBuffer(np.ascontiguousarray(result))
        return rgb
    
    @timing_decorator
    def sepia(self, buffer: PixelBuffer) -> PixelBuffer:
        """Fixed sepia matrix applied to every pixel, clamped to [0, 255]."""
        validate_buffer(buffer)
        color = ensure_color(buffer)
        matrix = sepia_matrix(color.channels)
        
        transformed = cv2.transform(color.to_array().astype(np.float32), matrix)
        return PixelBuffer(saturate_uint8(transformed).reshape(color.shape))
