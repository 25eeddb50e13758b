"""
Errors raised by buffer, color and threshold validation
"""


class ColorToolError(ValueError):
    """Base class for invalid input to the color tools"""


class InvalidBufferError(ColorToolError):
    """Pixel buffer is malformed (length, dtype, or not writable)"""


class InvalidColorError(ColorToolError):
    """Color component missing, non-integer or outside 0-255"""


class InvalidThresholdError(ColorToolError):
    """Replacement threshold is negative or not a number"""
