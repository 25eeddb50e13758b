"""
Pixel Buffer - Flat RGBA channel storage shared with the caller

A buffer is width * height * 4 unsigned bytes, channel order R, G, B, A,
row-major, top to bottom. The caller owns the memory: wrapping a bytearray,
memoryview or numpy array shares it rather than copying, so in-place
operations are visible through the caller's original object.
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidBufferError


CHANNELS = 4


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Represents a decoded RGBA image as a flat uint8 channel array"""
    width: int
    height: int
    data: np.ndarray  # 1-D uint8, width * height * 4

    def __post_init__(self):
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
                raise InvalidBufferError(f"{name} must be a non-negative integer, got {value!r}")

        if isinstance(self.data, np.ndarray) and not self.data.flags.c_contiguous:
            raise InvalidBufferError("Buffer array must be C-contiguous to share it with the caller")

        data = as_channel_array(self.data)
        expected = self.width * self.height * CHANNELS
        if data.size != expected:
            raise InvalidBufferError(
                f"Buffer holds {data.size} channels, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )
        object.__setattr__(self, 'data', data)

    def __len__(self) -> int:
        return int(self.data.size)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixels(self) -> np.ndarray:
        """(N, 4) view over the channel data"""
        return self.data.reshape(-1, CHANNELS)

    def to_array(self) -> np.ndarray:
        """(H, W, 4) view, ready for Image.fromarray(..., 'RGBA')"""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Read one pixel as (R, G, B, A)"""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height}")
        i = (y * self.width + x) * CHANNELS
        r, g, b, a = self.data[i:i + CHANNELS]
        return (int(r), int(g), int(b), int(a))

    def copy(self) -> 'PixelBuffer':
        """Create a copy that shares no memory with this buffer"""
        return PixelBuffer(self.width, self.height, self.data.copy())

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> 'PixelBuffer':
        """Create a PixelBuffer from an HxWx3 or HxWx4 uint8 array"""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InvalidBufferError("Pixels must be HxWx3 or HxWx4 array")
        if pixels.dtype != np.uint8:
            raise InvalidBufferError(f"Pixels must be uint8, got {pixels.dtype}")

        # Ensure RGBA
        if pixels.shape[2] == 3:
            alpha = np.full((*pixels.shape[:2], 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels, alpha], axis=2)
        elif not pixels.flags.c_contiguous:
            raise InvalidBufferError("RGBA pixels must be C-contiguous to share them with the caller")

        return cls(
            width=pixels.shape[1],
            height=pixels.shape[0],
            data=pixels.reshape(-1),
        )

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview], width: int, height: int) -> 'PixelBuffer':
        """Wrap raw RGBA bytes; bytearray and memoryview input is shared, not copied"""
        return cls(width=width, height=height, data=as_channel_array(data))

    @classmethod
    def from_pixels(cls, pixels: Sequence[Sequence[int]], width: int, height: int) -> 'PixelBuffer':
        """Build a buffer from a sequence of (R, G, B, A) tuples"""
        flat = [channel for pixel in pixels for channel in pixel]
        return cls(width=width, height=height, data=_array_from_ints(flat))


BufferLike = Union[PixelBuffer, np.ndarray, bytes, bytearray, memoryview, Sequence[int]]


def _array_from_ints(values: Sequence[Any]) -> np.ndarray:
    """Convert a sequence of channel ints to uint8, rejecting anything out of range"""
    try:
        arr = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidBufferError(f"Buffer values are not numeric: {e}") from None

    if arr.size == 0:
        return np.zeros(0, dtype=np.uint8)
    if arr.ndim != 1:
        raise InvalidBufferError("Channel sequence must be flat")
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise InvalidBufferError(f"Buffer channels must be integers, got {arr.dtype}")
    if arr.min() < 0 or arr.max() > 255:
        raise InvalidBufferError("Buffer channels must be in 0-255")
    return arr.astype(np.uint8)


def as_channel_array(buffer: BufferLike, writable: bool = False) -> np.ndarray:
    """
    Coerce any supported buffer to a flat uint8 channel array.

    PixelBuffer, numpy arrays, bytearray and memoryview input come back as
    views over the caller's memory. Lists and tuples are converted to a
    fresh array; see write_back() for returning results into a list.

    Args:
        buffer: Buffer in any supported form
        writable: Require the result to write through to the caller's memory

    Returns:
        1-D uint8 array whose length is a multiple of 4
    """
    if isinstance(buffer, PixelBuffer):
        arr = buffer.data
    elif isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise InvalidBufferError(f"Buffer array must be uint8, got {buffer.dtype}")
        if writable and not buffer.flags.c_contiguous:
            raise InvalidBufferError("Buffer array must be C-contiguous to modify in place")
        arr = buffer.reshape(-1)
    elif isinstance(buffer, (bytes, bytearray, memoryview)):
        try:
            arr = np.frombuffer(buffer, dtype=np.uint8)
        except (ValueError, BufferError) as e:
            raise InvalidBufferError(f"Cannot read buffer: {e}") from None
    elif isinstance(buffer, tuple):
        if writable:
            raise InvalidBufferError("Tuple buffers are immutable and cannot be modified in place")
        arr = _array_from_ints(buffer)
    elif isinstance(buffer, list):
        arr = _array_from_ints(buffer)
    else:
        raise InvalidBufferError(f"Unsupported buffer type: {type(buffer).__name__}")

    if arr.size % CHANNELS != 0:
        raise InvalidBufferError(
            f"Buffer length {arr.size} is not a multiple of {CHANNELS}"
        )
    if writable and not arr.flags.writeable:
        raise InvalidBufferError("Buffer is read-only")

    return arr


def write_back(buffer: BufferLike, arr: np.ndarray) -> None:
    """Copy channel values back into list buffers; array-backed buffers already share memory"""
    if isinstance(buffer, list):
        buffer[:] = arr.tolist()
