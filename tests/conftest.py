# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""Shared fixtures: synthetic images and style snapshots."""

import io

import numpy as np
import pytest
from PIL import Image


def solid_image(r, g, b, height=100, width=100, alpha=255):
    """Create a solid-color RGBA image array."""
    return np.full((height, width, 4), [r, g, b, alpha], dtype=np.uint8)


def two_tone_image(rgb1, rgb2, height=100, width=200):
    """Create an RGB image that is half one color, half another."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, : width // 2] = rgb1
    img[:, width // 2 :] = rgb2
    return img


def png_bytes(pixels):
    """Encode an (H, W, 3|4) uint8 array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def red_blue_png():
    return png_bytes(two_tone_image([200, 50, 50], [50, 50, 200]))
