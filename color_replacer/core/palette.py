"""
Color Types & Helpers

Colors are plain (R, G, B) tuples of ints in 0-255. Alpha never takes part
in color identity or distance.

For grouping, a color is packed into one 24-bit integer key:

    key = (r << 16) | (g << 8) | b
"""

import numbers
from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidColorError


# =============================================================================
# Color Types & Constants
# =============================================================================

Color = Tuple[int, int, int]          # RGB 0-255

CHANNEL_MIN = 0
CHANNEL_MAX = 255


# =============================================================================
# Validation
# =============================================================================

def validate_color(value: Sequence[int], name: str = "color") -> Color:
    """
    Check that value is three integer components in 0-255.

    Accepts tuples, lists and numpy integer arrays. Floats and bools are
    rejected even when they hold an integral value.

    Returns:
        The color as a tuple of builtin ints
    """
    try:
        components = tuple(value)
    except TypeError:
        raise InvalidColorError(f"{name} must be an (R, G, B) sequence, got {value!r}") from None

    if len(components) != 3:
        raise InvalidColorError(f"{name} must have 3 components, got {len(components)}")

    for c in components:
        if isinstance(c, (bool, np.bool_)) or not isinstance(c, numbers.Integral):
            raise InvalidColorError(f"{name} components must be integers, got {c!r}")
        if not CHANNEL_MIN <= c <= CHANNEL_MAX:
            raise InvalidColorError(f"{name} component {c} outside {CHANNEL_MIN}-{CHANNEL_MAX}")

    return (int(components[0]), int(components[1]), int(components[2]))


# =============================================================================
# Packing
# =============================================================================

def pack_color(color: Color) -> int:
    """Pack (R, G, B) into a 24-bit integer key"""
    r, g, b = color
    return (r << 16) | (g << 8) | b


def unpack_color(key: int) -> Color:
    """Unpack a 24-bit integer key into (R, G, B)"""
    key = int(key)
    return ((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF)


def pack_pixels(pixels: np.ndarray) -> np.ndarray:
    """Pack an (N, 3+) uint8 pixel array into (N,) 24-bit keys"""
    rgb = pixels[:, :3].astype(np.uint32)
    return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


# =============================================================================
# Formatting & Distance
# =============================================================================

def to_hex(color: Color) -> str:
    """Format a color as #rrggbb"""
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def color_distance(c1: Color, c2: Color) -> float:
    """Euclidean distance between colors in RGB space"""
    return float(np.sqrt(sum((int(a) - int(b)) ** 2 for a, b in zip(c1, c2))))


def distances_to(pixels: np.ndarray, color: Color) -> np.ndarray:
    """
    Euclidean RGB distance from every pixel to color.

    Args:
        pixels: (N, 3+) array, channels beyond the third are ignored
        color: Reference (R, G, B)

    Returns:
        (N,) float64 array of distances
    """
    diff = pixels[:, :3].astype(np.int32) - np.asarray(color, dtype=np.int32)
    return np.sqrt(np.sum(diff * diff, axis=1, dtype=np.float64))
