"""Exceptions raised by pixel_atlas."""


class AtlasError(Exception):
    """Base class for all atlas compositing errors."""


class InvalidDimensions(AtlasError, ValueError):
    """Buffer or source image requested with unusable width/height."""


class UnsupportedFormat(AtlasError, ValueError):
    """Export requested in a format the encoder cannot produce."""
