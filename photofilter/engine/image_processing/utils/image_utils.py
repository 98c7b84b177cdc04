import time
import numpy as np
from typing import Any, Tuple
from functools import wraps

from ...utils.logging_config import get_logger

logger = get_logger("photofilter.engine.image_processing")

class ImageProcessingError(Exception):
    """Base exception for filter engine errors"""
    pass

class EmptyInputError(ImageProcessingError):
    """Raised for a missing or zero-size pixel buffer"""
    pass

class InvalidParameterError(ImageProcessingError, ValueError):
    """Raised for a kernel size, tone value or region outside its documented range"""
    pass

class DimensionMismatchError(ImageProcessingError):
    """Raised when declared dimensions disagree with the sample array"""
    pass

class ProcessingTimeoutError(ImageProcessingError):
    """Raised when a background filter result does not arrive in time"""
    pass

def timing_decorator(func):
    """Decorator to measure and log processing time"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            processing_time = time.time() - start_time
            logger.info(f"{func.__name__} completed in {processing_time:.4f} seconds")
            return result
        except Exception as e:
            processing_time = time.time() - start_time
            logger.error(f"{func.__name__} failed after {processing_time:.4f} seconds: {str(e)}")
            raise
    return wrapper

def validate_buffer(buffer: Any) -> None:
    """Raise EmptyInputError unless the buffer holds at least one pixel"""
    if buffer is None:
        raise EmptyInputError("No pixel buffer provided")
    
    if buffer.width == 0 or buffer.height == 0:
        raise EmptyInputError(f"Pixel buffer is empty: {buffer.width}x{buffer.height}")

def validate_kernel_size(size: int, minimum: int = 1) -> int:
    """Kernel sizes must be odd integers no smaller than ``minimum``"""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidParameterError(f"Kernel size must be an integer, got {size!r}")
    
    if size < minimum or size % 2 == 0:
        raise InvalidParameterError(
            f"Kernel size must be an odd integer >= {minimum}, got {size}"
        )
    return int(size)

def validate_range(name: str, value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    if not low <= value <= high:
        raise InvalidParameterError(f"{name} must be within [{low}, {high}], got {value}")
    return float(value)

def saturate_uint8(values: np.ndarray) -> np.ndarray:
    """Round to nearest and clamp into the 8-bit sample range"""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)

def calculate_buffer_metrics(buffer: Any) -> dict:
    """Summary statistics used in processing logs"""
    samples = buffer.to_array()
    return {
        'size': (buffer.width, buffer.height),
        'channels': buffer.channels,
        'mean': float(np.mean(samples)) if samples.size else 0.0,
        'min': int(samples.min()) if samples.size else 0,
        'max': int(samples.max()) if samples.size else 0,
    }
