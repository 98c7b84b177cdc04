"""
Pytest configuration and shared fixtures

This module provides common fixtures and configuration for all tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import after path is set
from photofilter.core.config import Settings
from photofilter.core.services.filter_service import FilterService
from photofilter.core.state import EditorReducer, EditorState, LoadImage
from photofilter.engine.image_processing.configs.processing_config import FilterProcessingConfig
from photofilter.engine.image_processing.core.dispatcher import FilterDispatcher
from photofilter.engine.image_processing.core.pixel_buffer import PixelBuffer
from photofilter.engine.utils.error_handler import EngineErrorHandler
from photofilter.engine.utils.logging_config import setup_logging


# Configure test logging
setup_logging(log_level="DEBUG")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings used across the test session"""
    return Settings(
        environment="testing",
        debug=True,
        log_level="DEBUG",
        max_filter_workers=2,
        filter_timeout=10.0,
    )


@pytest.fixture
def processing_config() -> FilterProcessingConfig:
    """Small kernels keep the tests quick"""
    return FilterProcessingConfig(GAUSSIAN_KERNEL_SIZE=5, MEDIAN_KERNEL_SIZE=3)


@pytest.fixture
def dispatcher(processing_config) -> FilterDispatcher:
    return FilterDispatcher(processing_config)


@pytest.fixture
def errors() -> EngineErrorHandler:
    return EngineErrorHandler()


@pytest.fixture
def reducer(dispatcher, errors) -> EditorReducer:
    return EditorReducer(dispatcher, errors)


@pytest.fixture
def filter_service(test_settings, reducer):
    with FilterService(settings=test_settings, reducer=reducer) as service:
        yield service


@pytest.fixture
def sample_buffer() -> PixelBuffer:
    """Deterministic 32x24 RGB image"""
    rng = np.random.default_rng(42)
    return PixelBuffer(rng.integers(0, 256, (24, 32, 3), dtype=np.uint8))


@pytest.fixture
def white_buffer() -> PixelBuffer:
    return PixelBuffer.blank(4, 4, channels=3, value=255)


@pytest.fixture
def loaded_state(reducer, sample_buffer) -> EditorState:
    return reducer.reduce(EditorState(), LoadImage(sample_buffer, "content://media/1"))


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
