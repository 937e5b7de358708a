"""Errors raised while reading and writing images."""


class ImageError(Exception):
    """Base class for failures on the image open/save paths."""


class ImageIoError(ImageError):
    """Filesystem failure while reading or writing an image file."""


class UnsupportedFormatError(ImageError):
    """The PNG is valid but not 8-bit RGB without alpha."""


class DecodeError(ImageError):
    """The file is not a PNG or its data stream is corrupt."""


class EncodeError(ImageError):
    """The codec failed while producing PNG data."""
