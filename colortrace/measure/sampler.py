# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Raster pixel sampling.

Produces the stream of RGB observations the clusterer consumes:

1. Render the image onto an RGBA canvas whose longer side is at most
   ``max_dimension`` pixels (bounds sampling cost)
2. Read every ``stride``-th pixel of the row-major flattened buffer
3. Drop mostly-transparent pixels (alpha < 128)
4. Drop near-black and near-white pixels (luminance < 0.05 or > 0.95)

Step 4 also removes genuine pure black and white from the palette.
That is the documented behaviour, not an oversight.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageCms, UnidentifiedImageError

from colortrace.errors import UnreadableSource
from colortrace.measure.colorspace import relative_luminance_batch
from colortrace.schema import RGBColor


logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, Image.Image, NDArray[np.uint8]]


def fit_dimensions(
    width: int,
    height: int,
    max_dimension: int = 400,
) -> tuple[int, int]:
    """
    Scale (width, height) so the longer side is at most max_dimension.

    Aspect ratio is preserved and fractional sizes are truncated, the
    way a canvas truncates its width/height attributes.
    """
    w, h = float(width), float(height)
    if w > h and w > max_dimension:
        h = (h / w) * max_dimension
        w = max_dimension
    elif h > max_dimension:
        w = (w / h) * max_dimension
        h = max_dimension
    return max(1, int(w)), max(1, int(h))


def render_for_sampling(
    image: ImageSource,
    max_dimension: int = 400,
) -> NDArray[np.uint8]:
    """
    Decode an image and render it at sampling size.

    Applies ICC profile conversion to sRGB if the image has an embedded
    color profile, so sampled values match what a color picker shows.

    Args:
        image: One of:
            - Path to an image file (str or Path)
            - Encoded image bytes (PNG, JPEG, ...)
            - A PIL Image
            - NumPy uint8 array of shape (H, W, 3) or (H, W, 4)
        max_dimension: Longer side of the sampling canvas

    Returns:
        Array of shape (H, W, 4), uint8 RGBA

    Raises:
        UnreadableSource: if the image cannot be read or decoded
    """
    img = _load_image(image)
    width, height = img.size
    if width < 1 or height < 1:
        raise UnreadableSource(f"Image has no pixels ({width}x{height})")

    target = fit_dimensions(width, height, max_dimension)
    if target != (width, height):
        img = img.resize(target, Image.Resampling.BILINEAR)

    return np.array(img, dtype=np.uint8)


def _load_image(image: ImageSource) -> Image.Image:
    """Load any supported input as an RGBA PIL image."""
    if isinstance(image, np.ndarray):
        return _array_to_image(image)

    if isinstance(image, Image.Image):
        img = image
    elif isinstance(image, (str, Path, bytes, bytearray)):
        fp = io.BytesIO(image) if isinstance(image, (bytes, bytearray)) else image
        try:
            img = Image.open(fp)
            img.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as e:
            raise UnreadableSource(f"Failed to load image: {e}") from e
    else:
        raise TypeError(
            f"Expected file path, bytes, PIL Image or numpy array, got {type(image)}"
        )

    return _to_srgb_rgba(img)


def _array_to_image(pixels: NDArray) -> Image.Image:
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(
            f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
        )
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 array, got {pixels.dtype}")

    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=2)
    return Image.fromarray(np.ascontiguousarray(pixels))


def _to_srgb_rgba(img: Image.Image) -> Image.Image:
    """Convert to RGBA, remapping an embedded ICC profile to sRGB."""
    rgba = img.convert("RGBA")
    icc_profile = img.info.get("icc_profile")
    if not icc_profile:
        return rgba

    try:
        embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
        srgb_profile = ImageCms.createProfile("sRGB")
        rgb = ImageCms.profileToProfile(
            rgba.convert("RGB"), embedded_profile, srgb_profile
        )
    except (ImageCms.PyCMSError, OSError, ValueError):
        # Broken profile: sample the raw values instead
        logger.debug("ICC profile conversion failed; using raw pixel values")
        return rgba

    rgb.putalpha(rgba.getchannel("A"))
    return rgb


def sample_pixels(
    rgba: NDArray[np.uint8],
    *,
    stride: int = 5,
    min_alpha: int = 128,
    min_luminance: float = 0.05,
    max_luminance: float = 0.95,
) -> NDArray[np.uint8]:
    """
    Pick and filter sample pixels from an RGBA buffer.

    Sampling walks the flattened buffer, so a stride of 5 reads pixels
    0, 5, 10, ... regardless of row boundaries.

    Args:
        rgba: Array of shape (H, W, 4) or (N, 4), uint8
        stride: Read every Nth pixel
        min_alpha: Drop pixels with alpha below this
        min_luminance: Drop pixels darker than this
        max_luminance: Drop pixels lighter than this

    Returns:
        Array of shape (N, 3) with surviving RGB values in scan order
    """
    flat = np.asarray(rgba, dtype=np.uint8).reshape(-1, 4)
    sampled = flat[::stride]

    opaque = sampled[sampled[:, 3] >= min_alpha][:, :3]
    if len(opaque) == 0:
        return opaque

    luminance = relative_luminance_batch(opaque)
    keep = (luminance >= min_luminance) & (luminance <= max_luminance)
    return opaque[keep]


def iter_observations(samples: NDArray[np.uint8]) -> Iterator[RGBColor]:
    """Yield sampled pixels as RGBColor, in scan order."""
    for r, g, b in samples.tolist():
        yield RGBColor(r, g, b)
