"""
RGB <-> HSV conversion and channel split/merge.

HSV samples use the full 8-bit range for every channel: hue 0-360 degrees is
scaled onto 0-255 (OpenCV's ``*_FULL`` conversions).
"""

from typing import List, Sequence

import cv2
import numpy as np

from .pixel_buffer import PixelBuffer, SUPPORTED_CHANNELS
from ..utils.image_utils import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidParameterError,
    validate_buffer,
)


def _color_planes(buffer: PixelBuffer) -> np.ndarray:
    if buffer.channels not in (3, 4):
        raise InvalidParameterError(
            f"Expected a 3- or 4-channel buffer, got {buffer.channels} channel(s)"
        )
    return np.ascontiguousarray(buffer.to_array()[:, :, :3])


def rgb_to_hsv(buffer: PixelBuffer) -> PixelBuffer:
    """Per-pixel RGB -> HSV; alpha, if present, is dropped."""
    validate_buffer(buffer)
    hsv = cv2.cvtColor(_color_planes(buffer), cv2.COLOR_RGB2HSV_FULL)
    return PixelBuffer(hsv)


def hsv_to_rgb(buffer: PixelBuffer) -> PixelBuffer:
    validate_buffer(buffer)
    if buffer.channels != 3:
        raise InvalidParameterError(f"Expected a 3-channel HSV buffer, got {buffer.channels} channel(s)")
    rgb = cv2.cvtColor(buffer.to_array(), cv2.COLOR_HSV2RGB_FULL)
    return PixelBuffer(rgb)


def ensure_color(buffer: PixelBuffer) -> PixelBuffer:
    """Promote a grayscale buffer to RGB by replicating the gray channel."""
    validate_buffer(buffer)
    if buffer.channels != 1:
        return buffer
    return PixelBuffer(cv2.cvtColor(buffer.to_array(), cv2.COLOR_GRAY2RGB))


def split_channels(buffer: PixelBuffer) -> List[PixelBuffer]:
    """Split into one single-channel buffer per channel, in channel order."""
    validate_buffer(buffer)
    return [PixelBuffer(np.ascontiguousarray(buffer.pixels[:, :, i])) for i in range(buffer.channels)]


def merge_channels(planes: Sequence[PixelBuffer]) -> PixelBuffer:
    """Inverse of ``split_channels``; samples are copied byte for byte."""
    if not planes:
        raise EmptyInputError("No channels to merge")
    if len(planes) not in SUPPORTED_CHANNELS:
        raise InvalidParameterError(
            f"Can only merge {SUPPORTED_CHANNELS} channels, got {len(planes)}"
        )
    for plane in planes:
        validate_buffer(plane)

    height, width = planes[0].height, planes[0].width
    for index, plane in enumerate(planes):
        if plane.channels != 1:
            raise DimensionMismatchError(f"Channel {index} has {plane.channels} channels, expected 1")
        if (plane.width, plane.height) != (width, height):
            raise DimensionMismatchError(
                f"Channel {index} is {plane.width}x{plane.height}, expected {width}x{height}"
            )

    merged = cv2.merge([np.ascontiguousarray(plane.pixels[:, :, 0]) for plane in planes])
    return PixelBuffer(merged.reshape(height, width, len(planes)))
