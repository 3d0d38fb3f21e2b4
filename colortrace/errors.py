# Copyright (c) 2026 ColorTrace
# SPDX-License-Identifier: MIT

"""
Exception types raised by the extraction core.

Per-observation parse failures are not errors: adapters skip the
offending value and keep going. Everything here aborts the whole
extraction and no partial palette is returned.
"""

from __future__ import annotations


class ColorTraceError(Exception):
    """Base class for all ColorTrace errors."""


class InvalidFormat(ColorTraceError, ValueError):
    """A hex color (or URL) failed validation."""


class UnreadableSource(ColorTraceError):
    """A file or markup document could not be read or decoded."""


class UnsupportedFileType(ColorTraceError):
    """No source adapter handles the given file type."""


class ExtractionCancelled(ColorTraceError):
    """The caller cancelled an extraction in progress."""


class ExtractionTimeout(ColorTraceError):
    """An extraction ran past its configured time budget."""
