"""A command-line tool that renames receipt images using vision language models."""

from .generators import generate_filename
from .rename_receipts import rename_receipts
from .utils import extract_filename

__all__ = ["extract_filename", "generate_filename", "rename_receipts"]
