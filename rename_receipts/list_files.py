import logging
from pathlib import Path


def ensure_directory(path: Path) -> None:
    """Create a directory (and its parents) unless it already exists.

    Raises:
        NotADirectoryError: If the path exists but is not a directory
    """
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"{path} is not a directory")
        return
    logging.debug(f"Creating directory {path}")
    path.mkdir(parents=True, exist_ok=True)


def list_files(directory: Path) -> list[Path]:
    """List the regular files directly inside a directory, in filesystem order."""
    return [f for f in directory.iterdir() if f.is_file()]
