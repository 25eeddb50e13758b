"""
Detection - Dominant color extraction
"""

from .color import (
    ColorCount, RankedColorList, ColorFrequencyAnalyzer,
    count_colors, extract_top_colors,
)

__all__ = [
    'ColorCount', 'RankedColorList', 'ColorFrequencyAnalyzer',
    'count_colors', 'extract_top_colors',
]
