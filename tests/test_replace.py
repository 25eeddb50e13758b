"""Tests for tolerance-based color replacement."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
import pytest

from color_replacer import (
    ColorReplacer,
    InvalidBufferError,
    InvalidColorError,
    InvalidThresholdError,
    PixelBuffer,
    color_distance,
    replace_color,
    replace_color_copy,
)


def test_replaces_matching_pixel_only(two_pixel_buffer: bytearray) -> None:
    changed = replace_color(two_pixel_buffer, (255, 0, 0), (0, 0, 255), 10)

    assert changed == 1
    assert list(two_pixel_buffer) == [0, 0, 255, 255, 0, 255, 0, 255]


@pytest.mark.parametrize(("threshold", "replaced"), [(10, True), (5, False)])
def test_near_color_depends_on_threshold(threshold: float, replaced: bool) -> None:
    buf = bytearray([250, 5, 5, 255])

    replace_color(buf, (255, 0, 0), (0, 0, 0), threshold)

    expected = [0, 0, 0, 255] if replaced else [250, 5, 5, 255]
    assert list(buf) == expected
    assert color_distance((250, 5, 5), (255, 0, 0)) == pytest.approx(math.sqrt(75))


def test_distance_equal_to_threshold_does_not_match() -> None:
    buf = bytearray([10, 0, 0, 255])

    assert replace_color(buf, (0, 0, 0), (99, 99, 99), 10) == 0
    assert list(buf) == [10, 0, 0, 255]


def test_zero_threshold_matches_nothing(make_buffer: Callable[..., np.ndarray]) -> None:
    buf = make_buffer(200)
    source = tuple(int(c) for c in buf[:3])
    before = buf.copy()

    assert replace_color(buf, source, (1, 2, 3), 0) == 0
    assert np.array_equal(buf, before)


def test_source_equal_to_target_is_a_no_op(make_buffer: Callable[..., np.ndarray]) -> None:
    buf = make_buffer(200)
    before = buf.copy()

    assert replace_color(buf, (128, 128, 128), (128, 128, 128), 500) == 0
    assert np.array_equal(buf, before)


def test_alpha_and_length_never_change(make_buffer: Callable[..., np.ndarray]) -> None:
    buf = make_buffer(500)
    alpha = buf[3::4].copy()

    replace_color(buf, (128, 128, 128), (0, 0, 0), 200)

    assert buf.size == 2000
    assert np.array_equal(buf[3::4], alpha)


def test_transparent_pixels_match_by_rgb_alone() -> None:
    buf = bytearray([255, 0, 0, 0])

    replace_color(buf, (255, 0, 0), (0, 255, 0), 1)

    assert list(buf) == [0, 255, 0, 0]


def test_replacement_is_idempotent(make_buffer: Callable[..., np.ndarray]) -> None:
    once = make_buffer(400, palette_size=8)
    source = tuple(int(c) for c in once[:3])
    twice = once.copy()

    replace_color(once, source, (0, 0, 0), 60)
    replace_color(twice, source, (0, 0, 0), 60)
    replace_color(twice, source, (0, 0, 0), 60)

    assert np.array_equal(once, twice)


def test_default_threshold_is_thirty() -> None:
    buf = bytearray([20, 20, 0, 255, 30, 0, 0, 255])

    replace_color(buf, (0, 0, 0), (9, 9, 9))

    # sqrt(800) ~ 28.3 matches, 30 does not
    assert list(buf) == [9, 9, 9, 255, 30, 0, 0, 255]


def test_threshold_setting_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLOR_REPLACER_THRESHOLD", "5")
    buf = bytearray([4, 0, 0, 255, 6, 0, 0, 255])

    assert replace_color(buf, (0, 0, 0), (1, 1, 1)) == 1
    assert list(buf) == [1, 1, 1, 255, 6, 0, 0, 255]


def test_pixel_buffer_is_modified_in_place() -> None:
    raw = bytearray([255, 0, 0, 200] * 4)
    buf = PixelBuffer.from_bytes(raw, width=2, height=2)

    replace_color(buf, (255, 0, 0), (0, 0, 255), 10)

    assert buf.get_pixel(1, 1) == (0, 0, 255, 200)
    assert list(raw[:4]) == [0, 0, 255, 200]


def test_numpy_image_is_modified_in_place() -> None:
    image = np.zeros((2, 3, 4), dtype=np.uint8)
    image[..., 3] = 255

    replace_color(image, (0, 0, 0), (10, 20, 30), 1)

    assert image[1, 2].tolist() == [10, 20, 30, 255]


def test_list_buffer_is_modified_in_place() -> None:
    data = [255, 0, 0, 255, 0, 255, 0, 255]

    replace_color(data, (255, 0, 0), (0, 0, 255), 10)

    assert data == [0, 0, 255, 255, 0, 255, 0, 255]


def test_copy_variant_leaves_input_untouched(two_pixel_buffer: bytearray) -> None:
    result = replace_color_copy(bytes(two_pixel_buffer), (255, 0, 0), (0, 0, 255), 10)

    assert result.tolist() == [0, 0, 255, 255, 0, 255, 0, 255]
    assert list(two_pixel_buffer) == [255, 0, 0, 255, 0, 255, 0, 255]


def test_copy_variant_returns_pixel_buffer() -> None:
    buf = PixelBuffer.from_pixels([(255, 0, 0, 255)], width=1, height=1)

    result = replace_color_copy(buf, (255, 0, 0), (0, 0, 255), 10)

    assert isinstance(result, PixelBuffer)
    assert result.get_pixel(0, 0) == (0, 0, 255, 255)
    assert buf.get_pixel(0, 0) == (255, 0, 0, 255)


@pytest.mark.parametrize(
    "color",
    [(256, 0, 0), (-1, 0, 0), (1.5, 0, 0), (255.0, 0, 0), (True, 0, 0), (1, 2), "red", None],
)
def test_invalid_color_raises_before_writing(two_pixel_buffer: bytearray, color: object) -> None:
    with pytest.raises(InvalidColorError):
        replace_color(two_pixel_buffer, (255, 0, 0), color, 10)
    with pytest.raises(InvalidColorError):
        replace_color(two_pixel_buffer, color, (0, 0, 255), 10)

    assert list(two_pixel_buffer) == [255, 0, 0, 255, 0, 255, 0, 255]


@pytest.mark.parametrize("threshold", [-0.001, -30, float("nan"), "30"])
def test_invalid_threshold_raises(two_pixel_buffer: bytearray, threshold: object) -> None:
    with pytest.raises(InvalidThresholdError):
        replace_color(two_pixel_buffer, (255, 0, 0), (0, 0, 255), threshold)

    assert list(two_pixel_buffer) == [255, 0, 0, 255, 0, 255, 0, 255]


def test_bad_buffer_length_raises() -> None:
    with pytest.raises(InvalidBufferError):
        replace_color(bytearray(6), (0, 0, 0), (1, 1, 1), 10)


def test_read_only_buffer_raises() -> None:
    with pytest.raises(InvalidBufferError):
        replace_color(bytes(8), (0, 0, 0), (1, 1, 1), 10)


def test_buffer_is_checked_before_colors() -> None:
    with pytest.raises(InvalidBufferError):
        replace_color(bytearray(5), (999, 0, 0), (1, 1, 1), -1)


def test_infinite_threshold_matches_everything() -> None:
    buf = bytearray([0, 0, 0, 1, 255, 255, 255, 2])

    assert replace_color(buf, (0, 0, 0), (7, 7, 7), float("inf")) == 2
    assert list(buf) == [7, 7, 7, 1, 7, 7, 7, 2]


def test_replacer_matches_does_not_mutate(two_pixel_buffer: bytearray) -> None:
    replacer = ColorReplacer((255, 0, 0), (0, 0, 255), 10)

    mask = replacer.matches(two_pixel_buffer)

    assert mask.tolist() == [True, False]
    assert list(two_pixel_buffer) == [255, 0, 0, 255, 0, 255, 0, 255]


def test_replacer_reuses_validated_colors() -> None:
    replacer = ColorReplacer(np.array([255, 0, 0], dtype=np.uint8), [0, 0, 255], 10)

    assert replacer.source == (255, 0, 0)
    assert replacer.target == (0, 0, 255)
    assert replacer.threshold == 10.0
    assert not replacer.is_identity
