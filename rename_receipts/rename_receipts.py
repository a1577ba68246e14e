import asyncio
import concurrent.futures
import logging
from pathlib import Path

import llm
import rich
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .generators import generate_filename
from .image_utils import UnsupportedFormatError, is_supported_format, normalize_extension
from .list_files import ensure_directory, list_files
from .types import BatchSummary, ImageRecord, ProcessingResult, RenameOptions


async def read_image(image_path: Path) -> ImageRecord:
    """Read an input file into an image record, rejecting unsupported formats."""
    image_format = normalize_extension(image_path.name)
    if not is_supported_format(image_format):
        raise UnsupportedFormatError(image_format)
    content = await asyncio.to_thread(image_path.read_bytes)
    return ImageRecord(original_name=image_path.name, content=content, image_format=image_format)


async def process_image(
    image_path: Path,
    *,
    model: llm.Model,
    output_dir: Path,
    executor: concurrent.futures.Executor | None = None,
) -> ProcessingResult:
    """Process a single receipt.

    Errors are recorded in the returned result rather than raised, so one
    failing file never affects the rest of the batch.
    """
    try:
        logging.debug(f"Starting to process {image_path}")
        record = await read_image(image_path)
        new_name = await generate_filename(model, record.content, record.image_format, executor=executor)

        new_path = output_dir / f"{new_name}.{record.image_format}"
        if new_path.exists():
            logging.warning(f"Overwriting {new_path} with a copy of {record.original_name}")
        await asyncio.to_thread(new_path.write_bytes, record.content)
    except Exception as e:
        logging.debug(f"Failed to process {image_path}: {e!r}")
        return ProcessingResult.failed(image_path.name, e)
    return ProcessingResult.renamed(record.original_name, new_name)


def report_results(results: list[ProcessingResult]) -> BatchSummary:
    """Print each result and the totals for the batch."""
    for result in results:
        if result.success:
            rich.print(f"Renamed {escape(result.original_name)} → {escape(str(result.new_name))}")
        else:
            rich.print(f"[red]Failed to process {escape(result.original_name)}: {escape(str(result.error))}[/red]")

    successful = sum(1 for r in results if r.success)
    summary = BatchSummary(total=len(results), successful=successful, failed=len(results) - successful)
    rich.print(
        f"\nProcessed {summary.total} receipts: " f"{summary.successful} successful, {summary.failed} failed"
    )
    if summary.majority_failed:
        rich.print("[red]More than half of the receipts failed to process.[/red]")
    return summary


async def rename_receipts(
    options: RenameOptions,
    *,
    model: llm.Model,
) -> list[ProcessingResult]:
    """Copy every receipt in the input directory to a model-generated name.

    All files are processed concurrently. Errors while preparing the
    directories are raised; errors for individual files are reported.

    Args:
        options: Input and output directories
        model: LLM model to use for generating filenames

    Returns:
        One result per input file, in the order the files were listed
    """
    await asyncio.to_thread(ensure_directory, options.input_dir)
    await asyncio.to_thread(ensure_directory, options.output_dir)

    files = await asyncio.to_thread(list_files, options.input_dir)
    rich.print(f"Processing {len(files)} receipts...")

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        transient=True,
    )

    # One worker per file, so every request is in flight at once
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=max(len(files), 1))

    with progress, executor:
        task_id = progress.add_task("Renaming receipts...", total=len(files))

        async def process_with_progress(image_path: Path) -> ProcessingResult:
            result = await process_image(image_path, model=model, output_dir=options.output_dir, executor=executor)
            progress.advance(task_id)
            return result

        results = await asyncio.gather(*(process_with_progress(f) for f in files))

    report_results(results)
    return results
