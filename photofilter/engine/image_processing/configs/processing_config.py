from dataclasses import dataclass
from typing import Tuple
import os

@dataclass
class FilterProcessingConfig:
    """Configuration for the filter engine"""
    
    # Blur settings, matching the values the editor requests
    GAUSSIAN_KERNEL_SIZE: int = int(os.getenv('GAUSSIAN_KERNEL_SIZE', 15))
    MEDIAN_KERNEL_SIZE: int = int(os.getenv('MEDIAN_KERNEL_SIZE', 5))
    # Older builds always used a 5x5 median window whatever size was asked for
    LEGACY_FIXED_MEDIAN_WINDOW: bool = os.getenv('LEGACY_FIXED_MEDIAN_WINDOW', 'false').lower() in ('1', 'true', 'yes')
    LEGACY_MEDIAN_WINDOW: int = 5
    
    # Geometric settings
    ROTATION_ANGLE: float = float(os.getenv('ROTATION_ANGLE', 90.0))
    FLIP_AXIS: str = os.getenv('FLIP_AXIS', 'horizontal')
    ROTATION_BACKGROUND: int = 0
    
    # Tone adjustment limits
    CONTRAST_RANGE: Tuple[float, float] = (0.5, 2.0)
    BRIGHTNESS_RANGE: Tuple[float, float] = (-1.0, 1.0)
    
    LOG_PROCESSING_STEPS: bool = True
