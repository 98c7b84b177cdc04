"""
Configuration module for the filter engine

Contains the default kernel sizes, geometric settings and tone limits.
"""

from .processing_config import FilterProcessingConfig

__all__ = ['FilterProcessingConfig']
