"""
Utility functions for the filter engine

Contains the engine exception hierarchy, parameter validation and timing helpers.
"""

from .image_utils import (
    timing_decorator,
    validate_buffer,
    validate_kernel_size,
    validate_range,
    saturate_uint8,
    calculate_buffer_metrics,
    logger,
    ImageProcessingError,
    EmptyInputError,
    InvalidParameterError,
    DimensionMismatchError,
    ProcessingTimeoutError
)

__all__ = [
    'timing_decorator',
    'validate_buffer',
    'validate_kernel_size',
    'validate_range',
    'saturate_uint8',
    'calculate_buffer_metrics',
    'logger',
    'ImageProcessingError',
    'EmptyInputError',
    'InvalidParameterError',
    'DimensionMismatchError',
    'ProcessingTimeoutError',
]
