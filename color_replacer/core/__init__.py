"""
Color Replacer - Core buffer, palette and replacement utilities
"""

from .errors import (
    ColorToolError, InvalidBufferError, InvalidColorError, InvalidThresholdError,
)
from .buffer import PixelBuffer, BufferLike, as_channel_array
from .palette import (
    # Types
    Color,
    # Validation
    validate_color,
    # Packing
    pack_color, unpack_color,
    # Formatting & distance
    to_hex, color_distance,
)
from .replace import ColorReplacer, replace_color, replace_color_copy, validate_threshold
from .settings import ToolSettings, load_settings, get_settings
from .logs import configure_logging

__all__ = [
    # Errors
    'ColorToolError', 'InvalidBufferError', 'InvalidColorError', 'InvalidThresholdError',
    # Buffer
    'PixelBuffer', 'BufferLike', 'as_channel_array',
    # Palette
    'Color', 'validate_color', 'pack_color', 'unpack_color',
    'to_hex', 'color_distance',
    # Replacement
    'ColorReplacer', 'replace_color', 'replace_color_copy', 'validate_threshold',
    # Settings
    'ToolSettings', 'load_settings', 'get_settings', 'configure_logging',
]
