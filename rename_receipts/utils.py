"""Utility functions for rename-receipts."""

import re
from typing import Final

# The prompt asks the model to wrap its answer in these tags
FILENAME_PATTERN: Final = re.compile(r"<filename>(.*?)</filename>", re.DOTALL)


class ExtractionError(ValueError):
    """Exception raised when a model response contains no filename."""

    def __init__(self, message: str = "Failed to extract filename from response"):
        super().__init__(message)


def extract_filename(content: str) -> str:
    """Extract the filename wrapped in `<filename>` tags from a model response.

    The model may explain missing information before its answer, so only the
    tagged text is returned, verbatim. When several tagged answers are present
    the first one wins.

    Args:
        content: The text of the model response

    Returns:
        The text between the first pair of `<filename>` tags

    Raises:
        ExtractionError: If there is no tagged filename, or it is empty
    """
    match = FILENAME_PATTERN.search(content)
    if not match or not match.group(1):
        raise ExtractionError()
    return match.group(1)
