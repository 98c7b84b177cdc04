"""
Tests for routing filter and modification requests to the engine
"""

from enum import Enum

import numpy as np
import pytest

from photofilter.engine.image_processing.configs.processing_config import FilterProcessingConfig
from photofilter.engine.image_processing.core.dispatcher import (
    FilterDispatcher,
    FilterKind,
    ModificationKind,
    _ensure_exhaustive,
)
from photofilter.engine.image_processing.core.pixel_buffer import PixelBuffer
from photofilter.engine.image_processing.core.tone import ToneParams
from photofilter.engine.image_processing.utils.image_utils import EmptyInputError


@pytest.fixture
def dispatcher():
    return FilterDispatcher(FilterProcessingConfig(GAUSSIAN_KERNEL_SIZE=3, MEDIAN_KERNEL_SIZE=3))


@pytest.fixture
def sample():
    rng = np.random.default_rng(11)
    return PixelBuffer(rng.integers(0, 256, (12, 12, 4), dtype=np.uint8))


class TestFilterRouting:

    @pytest.mark.parametrize("kind", list(FilterKind))
    def test_every_filter_kind_dispatches(self, dispatcher, sample, kind):
        result = dispatcher.apply(kind, sample)

        assert (result.width, result.height) == (sample.width, sample.height)
        assert result is not sample

    def test_grayscale_route(self, dispatcher, sample):
        assert dispatcher.apply(FilterKind.GRAYSCALE, sample) == dispatcher.filters.grayscale(sample)

    def test_negative_route(self, dispatcher, sample):
        assert dispatcher.apply(FilterKind.NEGATIVE, sample) == dispatcher.filters.negative(sample)

    def test_configured_kernel_sizes(self, dispatcher, sample):
        assert dispatcher.apply(FilterKind.MEDIAN, sample) == dispatcher.filters.median_blur(sample, 3)
        assert dispatcher.apply(FilterKind.GAUSSIAN, sample) == dispatcher.filters.gaussian_blur(sample, 3)

    def test_sepia_route(self, dispatcher, sample):
        assert dispatcher.apply(FilterKind.SEPIA, sample) == dispatcher.filters.sepia(sample)


class TestModificationRouting:

    def test_rotate_uses_configured_angle(self, dispatcher, sample):
        result = dispatcher.apply(ModificationKind.ROTATE, sample)
        assert np.array_equal(result.pixels, np.rot90(sample.pixels))

    def test_flip_is_horizontal(self, dispatcher, sample):
        result = dispatcher.apply(ModificationKind.FLIP, sample)
        assert np.array_equal(result.pixels, sample.pixels[:, ::-1])

    def test_unknown_kind(self, dispatcher, sample):
        with pytest.raises(TypeError):
            dispatcher.apply("sepia", sample)


class TestExhaustiveness:

    def test_missing_handler_detected(self):
        class Extra(Enum):
            ONE = 1
            TWO = 2

        with pytest.raises(TypeError) as exc_info:
            _ensure_exhaustive(Extra, {Extra.ONE: lambda buffer: buffer})
        assert "TWO" in str(exc_info.value)

    def test_all_kinds_covered(self, dispatcher):
        assert set(dispatcher._filter_handlers) == set(FilterKind)
        assert set(dispatcher._modification_handlers) == set(ModificationKind)


def test_tone_passthrough(dispatcher, sample):
    assert dispatcher.adjust_tone(sample, ToneParams()) == sample


def test_errors_propagate(dispatcher):
    with pytest.raises(EmptyInputError):
        dispatcher.apply(FilterKind.SEPIA, PixelBuffer.blank(0, 0))


@pytest.mark.parametrize("kind", list(FilterKind) + list(ModificationKind))
def test_missing_source_is_noop(dispatcher, kind):
    assert dispatcher.apply(kind, None) is None


def test_missing_source_through_typed_entry_points(dispatcher):
    assert dispatcher.apply_filter(FilterKind.GAUSSIAN, None) is None
    assert dispatcher.apply_modification(ModificationKind.ROTATE, None) is None


pytestmark = [
    pytest.mark.unit,
    pytest.mark.image_processing
]
