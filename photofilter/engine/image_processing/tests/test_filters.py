"""
Tests for the color filters: grayscale, negative, median, Gaussian and sepia
"""

import numpy as np
import pytest

from photofilter.engine.image_processing.configs.processing_config import FilterProcessingConfig
from photofilter.engine.image_processing.core import filters as filters_module
from photofilter.engine.image_processing.core.filters import FilterEngine, convolve_interior
from photofilter.engine.image_processing.core.kernel_math import gaussian_kernel
from photofilter.engine.image_processing.core.pixel_buffer import PixelBuffer
from photofilter.engine.image_processing.utils.image_utils import (
    EmptyInputError,
    InvalidParameterError,
)


class BufferFactory:
    """Helpers for building test buffers"""

    @staticmethod
    def random(width=24, height=16, channels=3, seed=0) -> PixelBuffer:
        rng = np.random.default_rng(seed)
        return PixelBuffer(rng.integers(0, 256, (height, width, channels), dtype=np.uint8))

    @staticmethod
    def solid(color, width=4, height=4) -> PixelBuffer:
        pixels = np.empty((height, width, len(color)), dtype=np.uint8)
        pixels[:, :] = color
        return PixelBuffer(pixels)

    @staticmethod
    def bright_square(size=9, square=3) -> PixelBuffer:
        """Black gray image with a white ``square x square`` block in the middle"""
        pixels = np.zeros((size, size), dtype=np.uint8)
        start = (size - square) // 2
        pixels[start:start + square, start:start + square] = 255
        return PixelBuffer(pixels)


@pytest.fixture
def engine():
    return FilterEngine(FilterProcessingConfig())


@pytest.fixture
def legacy_engine():
    return FilterEngine(FilterProcessingConfig(LEGACY_FIXED_MEDIAN_WINDOW=True))


class TestGrayscale:

    def test_truncated_average(self, engine):
        buffer = PixelBuffer(np.array([[[30, 60, 90], [1, 1, 2], [255, 255, 255]]], dtype=np.uint8))
        gray = engine.grayscale(buffer)

        assert gray.channels == 1
        assert gray.pixel(0, 0) == (60,)
        assert gray.pixel(1, 0) == (1,)
        assert gray.pixel(2, 0) == (255,)

    def test_preserves_dimensions(self, engine):
        gray = engine.grayscale(BufferFactory.random(channels=4))
        assert (gray.width, gray.height, gray.channels) == (24, 16, 1)

    def test_gray_input_is_unchanged(self, engine):
        buffer = BufferFactory.random(channels=1)
        assert engine.grayscale(buffer) == buffer


class TestNegative:

    def test_white_becomes_black(self, engine):
        result = engine.negative(BufferFactory.solid((255, 255, 255)))
        assert result == BufferFactory.solid((0, 0, 0))

    @pytest.mark.parametrize("channels", [1, 3, 4])
    def test_involution(self, engine, channels):
        buffer = BufferFactory.random(channels=channels, seed=channels)
        assert engine.negative(engine.negative(buffer)) == buffer

    def test_alpha_passes_through(self, engine):
        buffer = BufferFactory.solid((10, 20, 30, 128))
        assert engine.negative(buffer).pixel(0, 0) == (245, 235, 225, 128)

    def test_input_not_modified(self, engine):
        buffer = BufferFactory.random()
        before = buffer.copy()
        engine.negative(buffer)
        assert buffer == before


class TestMedianBlur:

    def test_removes_isolated_spike(self, engine):
        pixels = np.full((7, 7, 3), 100, dtype=np.uint8)
        pixels[3, 3] = 255
        result = engine.median_blur(PixelBuffer(pixels), 3)

        assert result == BufferFactory.solid((100, 100, 100), 7, 7)

    def test_requested_size_is_honored(self, engine):
        buffer = BufferFactory.bright_square()

        assert engine.median_blur(buffer, 3).pixel(4, 4) == (255,)
        assert engine.median_blur(buffer, 5).pixel(4, 4) == (0,)

    def test_legacy_window_ignores_requested_size(self, legacy_engine):
        buffer = BufferFactory.bright_square()
        assert legacy_engine.median_blur(buffer, 3).pixel(4, 4) == (0,)

    def test_edges_are_replicated(self, engine):
        buffer = BufferFactory.solid((12, 34, 56), 6, 6)
        assert engine.median_blur(buffer, 5) == buffer

    def test_preserves_shape(self, engine):
        buffer = BufferFactory.random(channels=4)
        assert engine.median_blur(buffer, 7).shape == buffer.shape

    @pytest.mark.parametrize("size", [1, 2, 4, 0, -3])
    def test_invalid_kernel_size(self, engine, size):
        with pytest.raises(InvalidParameterError):
            engine.median_blur(BufferFactory.random(), size)


class TestGaussianBlur:

    def test_border_band_is_black_and_interior_kept(self, engine):
        buffer = BufferFactory.solid((120, 120, 120), 20, 20)
        result = engine.gaussian_blur(buffer, 5)
        pixels = result.pixels

        assert result.shape == buffer.shape
        assert not pixels[:2].any()
        assert not pixels[-2:].any()
        assert not pixels[:, :2].any()
        assert not pixels[:, -2:].any()
        assert np.all(pixels[2:-2, 2:-2] == 120)

    def test_kernel_larger_than_image(self, engine):
        result = engine.gaussian_blur(BufferFactory.random(width=6, height=6), 7)
        assert not result.pixels.any()

    def test_oversized_kernel_skips_kernel_construction(self, engine, monkeypatch):
        def fail(size):
            raise AssertionError(f"kernel of size {size} should not be built")

        monkeypatch.setattr(filters_module, "gaussian_kernel", fail)
        buffer = BufferFactory.random(width=4, height=4, channels=4)
        result = engine.gaussian_blur(buffer, 60001)

        assert result.shape == (4, 4, 4)
        assert not result.pixels[:, :, :3].any()
        assert np.array_equal(result.pixels[:, :, 3], buffer.pixels[:, :, 3])

    def test_alpha_passes_through(self, engine):
        buffer = BufferFactory.random(channels=4)
        result = engine.gaussian_blur(buffer, 3)

        assert result.channels == 4
        assert np.array_equal(result.pixels[:, :, 3], buffer.pixels[:, :, 3])

    def test_gray_input_promoted(self, engine):
        result = engine.gaussian_blur(BufferFactory.random(channels=1), 3)
        assert result.channels == 3

    @pytest.mark.parametrize("size", [0, 4, -1])
    def test_invalid_kernel_size(self, engine, size):
        with pytest.raises(InvalidParameterError):
            engine.gaussian_blur(BufferFactory.random(), size)


class TestConvolveInterior:

    def test_interior_matches_weighted_average(self):
        rng = np.random.default_rng(7)
        plane = rng.integers(0, 256, (12, 10), dtype=np.uint8)
        kernel = gaussian_kernel(5)
        result = convolve_interior(plane, kernel)

        for y in range(2, 10):
            for x in range(2, 8):
                window = plane[y - 2:y + 3, x - 2:x + 3].astype(np.float64)
                expected = (window * kernel.weights).sum()
                assert abs(int(result[y, x]) - expected) <= 1.0

    def test_band_width_is_half_kernel(self):
        plane = np.full((11, 11), 50, dtype=np.uint8)
        result = convolve_interior(plane, gaussian_kernel(7))

        assert not result[:3].any() and not result[-3:].any()
        assert not result[:, :3].any() and not result[:, -3:].any()
        assert np.all(result[3:-3, 3:-3] == 50)


class TestSepia:

    def test_matrix_product(self, engine):
        result = engine.sepia(BufferFactory.solid((10, 20, 30)))
        assert result.pixel(0, 0) == (25, 22, 17)

    def test_clamped_to_255(self, engine):
        result = engine.sepia(BufferFactory.solid((255, 255, 255)))
        assert result.pixel(0, 0) == (255, 255, 239)

    def test_alpha_passes_through(self, engine):
        result = engine.sepia(BufferFactory.solid((10, 20, 30, 77)))
        assert result.pixel(0, 0) == (25, 22, 17, 77)

    def test_gray_input_promoted(self, engine):
        result = engine.sepia(BufferFactory.solid((100,)))
        assert result.channels == 3


class TestEmptyInput:

    @pytest.mark.parametrize("operation", ["grayscale", "negative", "median_blur", "gaussian_blur", "sepia"])
    @pytest.mark.parametrize("buffer", [None, PixelBuffer.blank(0, 0), PixelBuffer.blank(5, 0)])
    def test_every_filter_rejects_empty_input(self, engine, operation, buffer):
        with pytest.raises(EmptyInputError):
            getattr(engine, operation)(buffer)


@pytest.mark.parametrize("operation", ["negative", "median_blur", "gaussian_blur", "sepia"])
def test_dimensions_preserved(engine, operation):
    buffer = BufferFactory.random(width=31, height=17)
    result = getattr(engine, operation)(buffer)
    assert (result.width, result.height) == (31, 17)


pytestmark = [
    pytest.mark.unit,
    pytest.mark.image_processing
]
