from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ImageFormat = Literal["png", "jpeg", "gif", "webp"]

DEFAULT_INPUT_DIR = Path("receipts")
DEFAULT_OUTPUT_DIR = Path("renamed-receipts")


@dataclass
class RenameOptions:
    """Options for renaming receipts."""

    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class ImageRecord:
    original_name: str
    content: bytes
    image_format: ImageFormat


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of processing a single receipt.

    Exactly one of `new_name` and `error` is set, depending on `success`.
    """

    success: bool
    original_name: str
    new_name: str | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.success and (self.new_name is None or self.error is not None):
            raise ValueError("A successful result needs a new name and no error")
        if not self.success and (self.error is None or self.new_name is not None):
            raise ValueError("A failed result needs an error and no new name")

    @classmethod
    def renamed(cls, original_name: str, new_name: str) -> "ProcessingResult":
        return cls(success=True, original_name=original_name, new_name=new_name)

    @classmethod
    def failed(cls, original_name: str, error: Exception) -> "ProcessingResult":
        return cls(success=False, original_name=original_name, error=error)


@dataclass(frozen=True)
class BatchSummary:
    total: int
    successful: int
    failed: int

    @property
    def majority_failed(self) -> bool:
        """True when more than half of the batch failed."""
        return self.failed > self.total / 2
