from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from ..utils.image_utils import DimensionMismatchError, InvalidParameterError

SUPPORTED_CHANNELS = (1, 3, 4)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Immutable 8-bit image: row-major, top-to-bottom, channels interleaved.

    ``pixels`` has shape (height, width, channels) and is exposed read-only;
    every engine operation returns a new buffer instead of editing one.
    The constructor always takes a private copy of the array it is given, so
    later writes to the caller's array never reach the buffer.
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidParameterError(f"Pixel data must be a numpy array, got {type(pixels).__name__}")
        if pixels.dtype != np.uint8:
            raise InvalidParameterError(f"Pixel data must be uint8, got {pixels.dtype}")
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3:
            raise DimensionMismatchError(f"Pixel data must be 2- or 3-dimensional, got shape {pixels.shape}")
        if pixels.shape[2] not in SUPPORTED_CHANNELS:
            raise InvalidParameterError(
                f"Channel count must be one of {SUPPORTED_CHANNELS}, got {pixels.shape[2]}"
            )

        owned = np.array(pixels, copy=True, order="C")
        owned.flags.writeable = False
        object.__setattr__(self, "pixels", owned)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Copy a (height, width[, channels]) uint8 array into a new buffer."""
        return cls(np.asarray(array))

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview], width: int,
                   height: int, channels: int) -> "PixelBuffer":
        """Build a buffer from flat samples laid out ``(y * width + x) * channels + c``."""
        if width < 0 or height < 0:
            raise InvalidParameterError(f"Dimensions must not be negative: {width}x{height}")
        if channels not in SUPPORTED_CHANNELS:
            raise InvalidParameterError(
                f"Channel count must be one of {SUPPORTED_CHANNELS}, got {channels}"
            )
        expected = width * height * channels
        if len(data) != expected:
            raise DimensionMismatchError(
                f"Expected {expected} samples for {width}x{height}x{channels}, got {len(data)}"
            )
        samples = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, channels)
        return cls(samples)

    @classmethod
    def blank(cls, width: int, height: int, channels: int = 3, value: int = 0) -> "PixelBuffer":
        return cls(np.full((height, width, channels), value, dtype=np.uint8))

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.pixels.shape

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def data(self) -> bytes:
        """Flat row-major samples, ``width * height * channels`` long."""
        return self.pixels.tobytes()

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def offset(self, x: int, y: int, c: int = 0) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= c < self.channels):
            raise IndexError(f"({x}, {y}, {c}) is outside a {self.width}x{self.height}x{self.channels} buffer")
        return (y * self.width + x) * self.channels + c

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        self.offset(x, y)
        return tuple(int(v) for v in self.pixels[y, x])

    def to_array(self) -> np.ndarray:
        """Writable copy of the samples, shape (height, width, channels)."""
        return np.array(self.pixels, copy=True, order="C")

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.to_array())

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.pixels, other.pixels)

    def __hash__(self):
        return hash((self.shape, self.data))

    def __repr__(self):
        return f"PixelBuffer(width={self.width}, height={self.height}, channels={self.channels})"
