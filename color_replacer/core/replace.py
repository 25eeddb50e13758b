"""
Color Replacement - Recolor every pixel near a source color

A pixel matches when the Euclidean distance between its (R, G, B) and the
source color is strictly less than the threshold. Matched pixels take the
target's R, G, B; alpha is never touched.

    replace_color(buffer, (255, 0, 0), (0, 0, 255), threshold=10)

replace_color() mutates the caller's buffer in place and shares no copy.
Use replace_color_copy() when the original must survive.
"""

import logging
import math
import numbers
from typing import Optional, Sequence, Union

import numpy as np

from .buffer import BufferLike, PixelBuffer, as_channel_array, write_back, CHANNELS
from .errors import InvalidThresholdError
from .palette import Color, validate_color, distances_to
from .settings import get_settings


logger = logging.getLogger(__name__)


def validate_threshold(threshold: float) -> float:
    """Check that threshold is a non-negative real number"""
    if isinstance(threshold, (bool, np.bool_)) or not isinstance(threshold, numbers.Real):
        raise InvalidThresholdError(f"Threshold must be a number, got {threshold!r}")
    threshold = float(threshold)
    if math.isnan(threshold):
        raise InvalidThresholdError("Threshold must not be NaN")
    if threshold < 0:
        raise InvalidThresholdError(f"Threshold must be >= 0, got {threshold}")
    return threshold


class ColorReplacer:
    """
    Replaces one color with another within a distance threshold.

    Colors and threshold are validated once at construction, so apply()
    only has to check the buffer before it starts writing.
    """

    def __init__(
        self,
        source: Sequence[int],
        target: Sequence[int],
        threshold: Optional[float] = None
    ):
        if threshold is None:
            threshold = get_settings().default_threshold

        self.source: Color = validate_color(source, "source")
        self.target: Color = validate_color(target, "target")
        self.threshold: float = validate_threshold(threshold)

    def __repr__(self) -> str:
        return f"ColorReplacer(source={self.source}, target={self.target}, threshold={self.threshold})"

    @property
    def is_identity(self) -> bool:
        """Replacing a color with itself never changes a buffer"""
        return self.source == self.target

    def _mask(self, channels: np.ndarray) -> np.ndarray:
        pixels = channels.reshape(-1, CHANNELS)
        return distances_to(pixels, self.source) < self.threshold

    def matches(self, buffer: BufferLike) -> np.ndarray:
        """
        Find which pixels fall within the threshold.

        Returns:
            (N,) boolean array, one entry per pixel
        """
        return self._mask(as_channel_array(buffer))

    def apply(self, buffer: BufferLike) -> int:
        """
        Recolor matching pixels in place.

        The buffer must be writable: a PixelBuffer, a C-contiguous uint8
        array, a bytearray, a writable memoryview or a list of ints.

        Returns:
            Number of pixels recolored
        """
        channels = as_channel_array(buffer, writable=True)

        if self.is_identity:
            logger.debug("Source equals target %s, buffer left unchanged", self.source)
            return 0

        mask = self._mask(channels)
        changed = int(np.count_nonzero(mask))

        if changed:
            pixels = channels.reshape(-1, CHANNELS)
            pixels[mask, :3] = self.target
            write_back(buffer, channels)

        logger.debug(
            "Replaced %d of %d pixels near %s with %s (threshold %.2f)",
            changed, channels.size // CHANNELS, self.source, self.target, self.threshold
        )
        return changed

    def apply_copy(self, buffer: BufferLike) -> Union[PixelBuffer, np.ndarray]:
        """
        Recolor a copy of the buffer, leaving the input untouched.

        Returns:
            A new PixelBuffer when given one, else a flat uint8 array
        """
        if isinstance(buffer, PixelBuffer):
            result = buffer.copy()
        else:
            result = as_channel_array(buffer).copy()
        self.apply(result)
        return result


def replace_color(
    buffer: BufferLike,
    source: Sequence[int],
    target: Sequence[int],
    threshold: Optional[float] = None
) -> int:
    """
    Replace every pixel within threshold of source with target, in place.

    All inputs are validated before the first write, so a failing call
    leaves the buffer exactly as it was.

    Args:
        buffer: Caller-owned RGBA buffer, modified in place
        source: (R, G, B) color to replace
        target: (R, G, B) replacement color
        threshold: Euclidean RGB distance, matches are strictly below it
                   (default: settings default_threshold, 30)

    Returns:
        Number of pixels recolored
    """
    as_channel_array(buffer, writable=True)
    return ColorReplacer(source, target, threshold).apply(buffer)


def replace_color_copy(
    buffer: BufferLike,
    source: Sequence[int],
    target: Sequence[int],
    threshold: Optional[float] = None
) -> Union[PixelBuffer, np.ndarray]:
    """Like replace_color() but returns a recolored copy"""
    as_channel_array(buffer)
    return ColorReplacer(source, target, threshold).apply_copy(buffer)
