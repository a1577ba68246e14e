#!/usr/bin/env python3


import asyncio
import logging
from pathlib import Path

import click

from .generators import DEFAULT_MODEL, get_model
from .rename_receipts import rename_receipts
from .types import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, RenameOptions


@click.command()
@click.option(
    "--input-dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_INPUT_DIR,
    show_default=True,
    help="Directory of receipt images to rename",
)
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help="Directory to write renamed copies to",
)
@click.option(
    "--model",
    "model_name",
    type=click.STRING,
    default=DEFAULT_MODEL,
    envvar="RENAME_RECEIPTS_MODEL",
    help=f"Model to use for renaming (default: {DEFAULT_MODEL})",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Set the logging level (default: INFO)",
)
def main(
    input_dir: Path,
    output_dir: Path,
    model_name: str | None,
    log_level: str,
) -> None:
    """Rename receipt images using AI-extracted dates, merchants and expense types."""
    # Set up logging
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # When not in debug mode, only show our own debug messages
    if level != logging.DEBUG:
        for logger_name in logging.root.manager.loggerDict:
            if not logger_name.startswith("rename_receipts"):
                logging.getLogger(logger_name).setLevel(logging.WARNING)

    model = get_model(model_name)
    options = RenameOptions(input_dir=input_dir, output_dir=output_dir)

    try:
        asyncio.run(rename_receipts(options, model=model))
    except Exception as e:
        raise click.ClickException(f"Fatal error: {e}") from e


if __name__ == "__main__":
    main()
