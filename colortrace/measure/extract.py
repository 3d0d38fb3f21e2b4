# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Source adapters: the extraction entry points.

Every ``analyze_*`` call owns a fresh ColorClusterer, so no state carries
over between extractions and concurrent calls never share clusters.

    image bytes/path  -> render -> sample -> cluster -> top 50
    SVG markup        -> fill/stroke/style values -> parse -> cluster
    DOM snapshot      -> computed colors -> parse -> cluster -> top 30
    URL               -> DOM snapshot of the current document (degraded)
    PDF / Office      -> fixed placeholder palette (no parsing)
"""

from __future__ import annotations

import logging
import mimetypes
import re
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union
from urllib.parse import urlparse

from lxml import etree

from colortrace.config import DEFAULT_CONFIG, ExtractionConfig
from colortrace.errors import InvalidFormat, UnreadableSource, UnsupportedFileType
from colortrace.measure.clustering import ColorClusterer, ExtractionGuard
from colortrace.measure.colorspace import hex_to_rgb, is_valid_hex
from colortrace.measure.parser import (
    NamedColorResolver,
    is_transparent,
    parse_css_color,
    resolve_named_color,
)
from colortrace.measure.sampler import (
    ImageSource,
    iter_observations,
    render_for_sampling,
    sample_pixels,
)
from colortrace.schema import (
    ExtractionResult,
    Palette,
    PaletteEntry,
    RGBColor,
    SourceKind,
)


logger = logging.getLogger(__name__)

CancelCallback = Callable[[], bool]
StyleLookup = Callable[[Any], Mapping[str, str]]

DOM_COLOR_PROPERTIES = (
    "color",
    "backgroundColor",
    "borderColor",
    "borderTopColor",
    "borderRightColor",
    "borderBottomColor",
    "borderLeftColor",
    "outlineColor",
)

OFFICE_EXTENSIONS = (".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx")

URL_NOTICE = "Analyzing current page colors due to browser security restrictions."
PDF_NOTICE = (
    "PDF color extraction requires additional libraries. Showing sample colors."
)
DOCUMENT_NOTICE = (
    "Document color extraction requires server-side processing. "
    "Showing sample colors."
)

_SVG_SKIP_VALUES = frozenset({"none", "transparent"})
_STYLE_FILL_RE = re.compile(r"fill:\s*([^;]+)")
_STYLE_STROKE_RE = re.compile(r"stroke:\s*([^;]+)")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _placeholder(*rows: tuple[str, int, str]) -> Palette:
    return Palette(entries=tuple(
        PaletteEntry(rgb=hex_to_rgb(hex_value), count=count, percentage=pct)
        for hex_value, count, pct in rows
    ))


# Typical UI chrome of each format, shown until real parsing exists
PDF_PLACEHOLDER = _placeholder(
    ("#000000", 100, "40.00"),
    ("#FFFFFF", 80, "32.00"),
    ("#333333", 50, "20.00"),
    ("#0066CC", 20, "8.00"),
)
DOCUMENT_PLACEHOLDER = _placeholder(
    ("#0078D4", 100, "35.00"),
    ("#FFFFFF", 90, "31.50"),
    ("#323130", 60, "21.00"),
    ("#107C10", 35, "12.50"),
)


def _guard_for(
    config: ExtractionConfig,
    cancel: Optional[CancelCallback],
) -> ExtractionGuard:
    return ExtractionGuard(cancel=cancel, timeout=config.timeout)


# =============================================================================
# Raster images
# =============================================================================


def analyze_image(
    image: ImageSource,
    *,
    config: ExtractionConfig = DEFAULT_CONFIG,
    cancel: Optional[CancelCallback] = None,
) -> ExtractionResult:
    """
    Extract a palette from a raster image.

    Args:
        image: File path, encoded bytes, PIL Image, or uint8 array of
            shape (H, W, 3) / (H, W, 4)
        config: Sampling and clustering settings
        cancel: Polled between observations; return True to abort

    Returns:
        ExtractionResult with at most ``config.image_palette_cap`` colors

    Raises:
        UnreadableSource: if the image cannot be decoded
        ExtractionCancelled, ExtractionTimeout
    """
    guard = _guard_for(config, cancel)
    rgba = render_for_sampling(image, max_dimension=config.max_dimension)
    samples = sample_pixels(
        rgba,
        stride=config.sample_stride,
        min_alpha=config.min_alpha,
        min_luminance=config.min_luminance,
        max_luminance=config.max_luminance,
    )

    clusterer = ColorClusterer(threshold=config.similarity_threshold)
    clusterer.add_observations(iter_observations(samples), guard)
    palette = clusterer.finalize(limit=config.image_palette_cap)

    logger.info(
        "Image %dx%d: %d samples, %d clusters, %d returned",
        rgba.shape[1], rgba.shape[0], len(samples), len(clusterer), len(palette),
    )
    return ExtractionResult(palette=palette, source=SourceKind.IMAGE)


# =============================================================================
# SVG markup
# =============================================================================


def analyze_svg(
    markup: Union[str, bytes],
    *,
    config: ExtractionConfig = DEFAULT_CONFIG,
    cancel: Optional[CancelCallback] = None,
    resolve_named: NamedColorResolver = resolve_named_color,
) -> ExtractionResult:
    """
    Extract a palette from SVG markup.

    For every element, in document order, looks at the ``fill`` and
    ``stroke`` attributes and the ``fill:``/``stroke:`` declarations of an
    inline ``style``. Values that fail to parse are skipped.

    Raises:
        UnreadableSource: if the markup is not well-formed XML
    """
    guard = _guard_for(config, cancel)
    root = _parse_svg(markup)

    clusterer = ColorClusterer(threshold=config.similarity_threshold)
    clusterer.add_observations(_svg_observations(root, resolve_named), guard)
    palette = clusterer.finalize(limit=config.svg_palette_cap)

    logger.info("SVG: %d clusters, %d returned", len(clusterer), len(palette))
    return ExtractionResult(palette=palette, source=SourceKind.SVG)


def _parse_svg(markup: Union[str, bytes]) -> etree._Element:
    if isinstance(markup, str):
        markup = markup.encode("utf-8")
    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
    )
    try:
        return etree.fromstring(markup, parser)
    except etree.XMLSyntaxError as e:
        raise UnreadableSource(f"Failed to parse SVG: {e}") from e


def _svg_color_values(element: etree._Element) -> Iterator[str]:
    """Raw color strings of one element, in inspection order."""
    for attr in ("fill", "stroke"):
        value = element.get(attr)
        if value and value.strip() not in _SVG_SKIP_VALUES:
            yield value

    style = element.get("style")
    if style:
        for pattern in (_STYLE_FILL_RE, _STYLE_STROKE_RE):
            match = pattern.search(style)
            if match:
                yield match.group(1)


def _svg_observations(
    root: etree._Element,
    resolve_named: NamedColorResolver,
) -> Iterator[RGBColor]:
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue  # processing instructions, entities
        for value in _svg_color_values(element):
            rgb = parse_css_color(value, resolve_named)
            if rgb is not None:
                yield rgb


# =============================================================================
# DOM computed styles
# =============================================================================


def _kebab(name: str) -> str:
    return _CAMEL_RE.sub("-", name).lower()


def _style_value(style: Mapping[str, str], prop: str) -> Optional[str]:
    value = style.get(prop)
    if value is None:
        value = style.get(_kebab(prop))
    return value


def _dom_observations(
    elements: Iterable[Any],
    computed_style_of: StyleLookup,
    resolve_named: NamedColorResolver,
) -> Iterator[RGBColor]:
    for element in elements:
        style = computed_style_of(element)
        for prop in DOM_COLOR_PROPERTIES:
            value = _style_value(style, prop)
            if not value or is_transparent(value):
                continue
            rgb = parse_css_color(value, resolve_named)
            if rgb is not None:
                yield rgb


def analyze_dom(
    elements: Iterable[Any],
    computed_style_of: StyleLookup,
    *,
    config: ExtractionConfig = DEFAULT_CONFIG,
    cancel: Optional[CancelCallback] = None,
    resolve_named: NamedColorResolver = resolve_named_color,
) -> ExtractionResult:
    """
    Extract a palette from a snapshot of computed styles.

    Args:
        elements: Every element of the document, in document order
        computed_style_of: Returns the computed style mapping of an element.
            Keys may be camelCase ("backgroundColor") or kebab-case
            ("background-color").
        config: Clustering settings
        cancel: Polled between observations; return True to abort
        resolve_named: Resolver for keyword colors

    Returns:
        ExtractionResult with at most ``config.dom_palette_cap`` colors
    """
    guard = _guard_for(config, cancel)
    clusterer = ColorClusterer(threshold=config.similarity_threshold)
    clusterer.add_observations(
        _dom_observations(elements, computed_style_of, resolve_named), guard
    )
    palette = clusterer.finalize(limit=config.dom_palette_cap)

    logger.info("DOM: %d clusters, %d returned", len(clusterer), len(palette))
    return ExtractionResult(palette=palette, source=SourceKind.DOM)


def analyze_url(
    url: str,
    elements: Iterable[Any],
    computed_style_of: StyleLookup,
    *,
    config: ExtractionConfig = DEFAULT_CONFIG,
    cancel: Optional[CancelCallback] = None,
    resolve_named: NamedColorResolver = resolve_named_color,
) -> ExtractionResult:
    """
    "Extract" a palette from a URL.

    Remote pages are never fetched. After validating the URL this scans
    the supplied *current* document instead and says so in the notice.

    Raises:
        InvalidFormat: if url is not an absolute http(s) URL
    """
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidFormat(f"Invalid URL: {url!r}")

    logger.warning("URL %s not fetched: %s", url, URL_NOTICE)
    result = analyze_dom(
        elements,
        computed_style_of,
        config=config,
        cancel=cancel,
        resolve_named=resolve_named,
    )
    return ExtractionResult(
        palette=result.palette,
        source=SourceKind.URL,
        notice=URL_NOTICE,
    )


# =============================================================================
# Document formats (placeholders)
# =============================================================================


def analyze_pdf(data: Optional[bytes] = None) -> ExtractionResult:
    """Return the fixed PDF placeholder palette. Never fails."""
    logger.warning(PDF_NOTICE)
    return ExtractionResult(
        palette=PDF_PLACEHOLDER,
        source=SourceKind.PDF,
        notice=PDF_NOTICE,
    )


def analyze_document(data: Optional[bytes] = None) -> ExtractionResult:
    """Return the fixed Office placeholder palette. Never fails."""
    logger.warning(DOCUMENT_NOTICE)
    return ExtractionResult(
        palette=DOCUMENT_PLACEHOLDER,
        source=SourceKind.DOCUMENT,
        notice=DOCUMENT_NOTICE,
    )


# =============================================================================
# File dispatch
# =============================================================================


def detect_source_kind(filename: str, mime_type: Optional[str]) -> SourceKind:
    """
    Pick the adapter for a file.

    Raises:
        UnsupportedFileType: if no adapter handles the file
    """
    name = (filename or "").lower()
    mime = (mime_type or "").lower()
    if not mime and name:
        mime = mimetypes.guess_type(name)[0] or ""

    if mime.startswith("image/"):
        if name.endswith(".svg") or mime == "image/svg+xml":
            return SourceKind.SVG
        return SourceKind.IMAGE
    if mime == "application/pdf" or name.endswith(".pdf"):
        return SourceKind.PDF
    if name.endswith(OFFICE_EXTENSIONS):
        return SourceKind.DOCUMENT

    raise UnsupportedFileType(
        f"Unsupported file type: {filename or '<unnamed>'} ({mime or 'unknown'})"
    )


def analyze_file(
    source: Union[str, Path, bytes],
    *,
    filename: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: ExtractionConfig = DEFAULT_CONFIG,
    cancel: Optional[CancelCallback] = None,
    resolve_named: NamedColorResolver = resolve_named_color,
) -> ExtractionResult:
    """
    Extract a palette from a file, choosing the adapter by type.

    Args:
        source: Path to the file, or its raw bytes
        filename: Name used for type detection (defaults to the path name)
        mime_type: Declared MIME type; guessed from filename when absent

    Raises:
        UnsupportedFileType: before any adapter runs, if the type is unknown
        UnreadableSource: if the file cannot be read or decoded

    Example:
        >>> result = analyze_file("logo.png")
        >>> result.palette[0].hex
        '#3941C8'
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        filename = filename or path.name
        kind = detect_source_kind(filename, mime_type)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnreadableSource(f"Failed to read file {path}: {e}") from e
    else:
        kind = detect_source_kind(filename or "", mime_type)
        data = bytes(source)

    logger.debug("Dispatching %s to %s adapter", filename, kind.value)

    if kind is SourceKind.SVG:
        return analyze_svg(
            data, config=config, cancel=cancel, resolve_named=resolve_named
        )
    if kind is SourceKind.IMAGE:
        return analyze_image(data, config=config, cancel=cancel)
    if kind is SourceKind.PDF:
        return analyze_pdf(data)
    return analyze_document(data)


# =============================================================================
# Manual colors
# =============================================================================


def add_manual_color(palette: Palette, value: str) -> tuple[Palette, bool]:
    """
    Add a picked or typed hex color to the front of a palette.

    The color skips clustering entirely. A missing '#' is added before
    validation, and the color is stored under its canonical 6-digit hex.
    Duplicates are detected by exact hex string, not by similarity.

    Returns:
        (palette, added); ``added`` is False when the hex already exists

    Raises:
        InvalidFormat: if value is not a 3- or 6-digit hex color
    """
    value = (value or "").strip()
    if not value.startswith("#"):
        value = "#" + value
    if not is_valid_hex(value):
        raise InvalidFormat(f"Invalid color format {value!r}. Use #RRGGBB or #RGB")

    palette, added = palette.with_color(hex_to_rgb(value))
    if not added:
        logger.info("Color %s already in the palette", value.upper())
    return palette, added
