from typing import Final, TypeGuard

from .types import ImageFormat

# Image encodings the vision model accepts
SUPPORTED_FORMATS: Final = frozenset({"png", "jpeg", "gif", "webp"})

# Suffixes that are spelled differently from their canonical format token
EXTENSION_ALIASES: Final = {"jpg": "jpeg"}


class UnsupportedFormatError(ValueError):
    """Exception raised when a file is not in a format the model accepts."""

    def __init__(self, image_format: str):
        self.image_format = image_format
        super().__init__(f"Unsupported image format: {image_format}")


def normalize_extension(filename: str) -> str:
    """Return the canonical format token for a filename's extension.

    The extension is the text after the last dot, lowercased, with aliases
    such as `jpg` mapped to their canonical name. A name without a dot has
    an empty extension. The result is not validated; see `is_supported_format`.
    """
    _, sep, extension = filename.rpartition(".")
    if not sep:
        return ""
    extension = extension.lower()
    return EXTENSION_ALIASES.get(extension, extension)


def is_supported_format(image_format: str) -> TypeGuard[ImageFormat]:
    """Check if a format token is one the model accepts."""
    return image_format in SUPPORTED_FORMATS


def mime_type(image_format: ImageFormat) -> str:
    return f"image/{image_format}"
