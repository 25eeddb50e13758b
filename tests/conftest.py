"""Shared fixtures for color_replacer tests."""

from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from color_replacer.core.settings import CONFIG_ENV, ENV_OVERRIDES, get_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (CONFIG_ENV, *ENV_OVERRIDES):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def two_pixel_buffer() -> bytearray:
    """2x1 image: red then green, both opaque."""
    return bytearray([255, 0, 0, 255, 0, 255, 0, 255])


@pytest.fixture
def make_buffer(rng: np.random.Generator) -> Callable[..., np.ndarray]:
    """Factory for random RGBA buffers drawn from a small palette so colors repeat."""

    def _make(pixels: int, palette_size: int = 16) -> np.ndarray:
        palette = rng.integers(0, 256, size=(palette_size, 3), dtype=np.uint8)
        choice = rng.integers(0, palette_size, size=pixels)
        alpha = rng.integers(0, 256, size=(pixels, 1), dtype=np.uint8)
        return np.concatenate([palette[choice], alpha], axis=1).reshape(-1)

    return _make
