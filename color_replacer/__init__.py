"""
Color Replacer - Find the dominant colors of an image and swap one for another
"""

from .core import (
    PixelBuffer, Color, ColorReplacer,
    ColorToolError, InvalidBufferError, InvalidColorError, InvalidThresholdError,
    replace_color, replace_color_copy, color_distance,
    ToolSettings, get_settings, configure_logging,
)
from .detection import (
    ColorCount, RankedColorList, ColorFrequencyAnalyzer,
    count_colors, extract_top_colors,
)

__version__ = "0.1.0"
__all__ = [
    'PixelBuffer',
    'Color',
    'ColorCount',
    'RankedColorList',
    'ColorFrequencyAnalyzer',
    'ColorReplacer',
    'ColorToolError',
    'InvalidBufferError',
    'InvalidColorError',
    'InvalidThresholdError',
    'count_colors',
    'extract_top_colors',
    'replace_color',
    'replace_color_copy',
    'color_distance',
    'ToolSettings',
    'get_settings',
    'configure_logging',
    'analyze',
]


def analyze(buffer, limit: int = None) -> dict:
    """
    Summarize the colors of an image for display.

    Args:
        buffer: RGBA pixel buffer
        limit: Number of top colors (default: settings top_n)

    Returns:
        Dictionary with pixel totals and the ranked colors
    """
    analyzer = ColorFrequencyAnalyzer(buffer)
    counts = analyzer.counts()
    total = analyzer.total_pixels
    ranked = analyzer.top_colors(limit)

    return {
        'total_pixels': total,
        'distinct_colors': len(counts),
        'top_colors': [
            {
                'color': entry.color,
                'hex': entry.hex,
                'count': entry.count,
                'share': entry.count / total if total else 0.0,
            }
            for entry in ranked
        ],
    }
