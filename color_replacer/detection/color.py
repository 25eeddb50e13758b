"""
Color Frequency Analyzer - Rank the colors of an image by pixel count
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from ..core.buffer import BufferLike, as_channel_array, CHANNELS
from ..core.palette import Color, pack_pixels, unpack_color, to_hex
from ..core.settings import get_settings


logger = logging.getLogger(__name__)


class ColorCount(NamedTuple):
    """A color and the number of pixels that have it"""
    color: Color
    count: int

    @property
    def hex(self) -> str:
        return to_hex(self.color)


class RankedColorList(list):
    """
    ColorCounts sorted by count descending.

    Colors with equal counts keep the order in which the scan first met
    them.
    """

    @property
    def colors(self) -> List[Color]:
        return [entry.color for entry in self]

    def to_hex(self) -> List[str]:
        return [entry.hex for entry in self]


def _histogram(buffer: BufferLike) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Count packed colors.

    Returns:
        (keys, counts, first_index) for every distinct color, where
        first_index is the pixel index at which the color first appears
    """
    channels = as_channel_array(buffer)
    pixels = channels.reshape(-1, CHANNELS)
    keys = pack_pixels(pixels)
    unique, first_index, counts = np.unique(keys, return_index=True, return_counts=True)
    return unique, counts, first_index


def count_colors(buffer: BufferLike) -> Dict[Color, int]:
    """
    Count every distinct color, alpha ignored.

    Returns:
        {(R, G, B): count} in the order colors were first encountered
    """
    keys, counts, first_index = _histogram(buffer)
    order = np.argsort(first_index, kind='stable')
    return {unpack_color(keys[i]): int(counts[i]) for i in order}


def extract_top_colors(buffer: BufferLike, limit: Optional[int] = None) -> RankedColorList:
    """
    Find the most frequent colors in a buffer.

    The buffer is only read. Ties in count are broken by which color
    appears first in the buffer.

    Args:
        buffer: RGBA buffer, length a multiple of 4
        limit: Maximum entries returned (default: settings top_n, 10)

    Returns:
        RankedColorList of at most limit entries; empty for an empty buffer
    """
    if limit is None:
        limit = get_settings().top_n
    if isinstance(limit, bool) or not isinstance(limit, (int, np.integer)) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")

    keys, counts, first_index = _histogram(buffer)

    # Primary key: count descending; secondary: first appearance
    order = np.lexsort((first_index, -counts.astype(np.int64)))

    ranked = RankedColorList(
        ColorCount(unpack_color(keys[i]), int(counts[i]))
        for i in order[:limit]
    )

    logger.debug(
        "Found %d distinct colors in %d pixels, returning %d",
        len(keys), int(counts.sum()), len(ranked)
    )
    return ranked


class ColorFrequencyAnalyzer:
    """Analyzes a buffer's colors by pixel count"""

    def __init__(self, buffer: BufferLike):
        # Validate up front so a bad buffer fails at construction
        as_channel_array(buffer)
        self.buffer = buffer

    @property
    def total_pixels(self) -> int:
        return as_channel_array(self.buffer).size // CHANNELS

    def counts(self) -> Dict[Color, int]:
        """Full histogram, rescanned on each call"""
        return count_colors(self.buffer)

    def top_colors(self, limit: Optional[int] = None) -> RankedColorList:
        """Most frequent colors, rescanned on each call"""
        return extract_top_colors(self.buffer, limit)

    def dominant_color(self) -> Optional[Color]:
        """The single most frequent color, or None for an empty buffer"""
        top = self.top_colors(1)
        return top[0].color if top else None
