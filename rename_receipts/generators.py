import asyncio
import concurrent.futures
import logging

import click
import llm

from .image_utils import SUPPORTED_FORMATS, mime_type
from .types import ImageFormat
from .utils import extract_filename

RENAME_RECEIPT_PROMPT = """You are tasked with naming a receipt image according to a specific convention. Your goal is to extract key information from the image and use it to create a standardized filename.

Carefully examine the image and identify the following information:
1. The date of the transaction (in YYYY-MM-DD format)
2. The name of the merchant
3. The type of expense

The expense type must be one of the following:
- TRANSPORTATION
- LODGING
- MEALS-PER-DIEM
- GROUND-TRANSPORTATION

If the merchant name is not clearly visible or identifiable in the image, use a generic description of the merchant type (e.g., "restaurant", "hotel", "taxi-service").

Using the information you've extracted, create a filename in the following format:
YYYY-MM-DD_<expense_type>_<merchant_name>

For example, if the receipt is dated January 15, 2023, from Hilton Hotels, and it's for lodging, the filename would be:
2023-01-15_lodging_hilton-hotels

Provide your answer in the following format:
<filename>Your generated filename here</filename>

If you cannot determine one or more of the required elements from the image, explain what information is missing in your response before providing the best possible filename based on the available information."""

RECEIPT_PREAMBLE = "Here is the receipt image to analyze:"

DEFAULT_MODEL = "gpt-4o-mini"
TEMPERATURE = 0
MAX_RETRIES = 3  # Retries after the first attempt


class InvalidResponseError(RuntimeError):
    """Exception raised when the model returns no usable text."""


def get_model(model_name: str | None) -> llm.Model:
    """Look up a model, checking that it has an API key and accepts images."""
    model = llm.get_model(model_name or DEFAULT_MODEL)
    if model.needs_key and not llm.get_key(getattr(model, "key", None), model.needs_key, model.key_env_var):
        env_var = model.key_env_var or f"{model.needs_key.upper()}_API_KEY"
        raise click.ClickException(
            f"{env_var} environment variable not set. " f"Set it, or store a key with: llm keys set {model.needs_key}"
        )
    if not any(mime_type(f) in model.attachment_types for f in SUPPORTED_FORMATS):
        raise click.ClickException(f"Model {model.model_id} does not support any image types")
    return model


def request_filename(model: llm.Model, image: bytes, image_format: ImageFormat) -> str:
    """Ask the model for a filename once, returning the raw response text."""
    response = model.prompt(
        RECEIPT_PREAMBLE,
        system=RENAME_RECEIPT_PROMPT,
        attachments=[llm.Attachment(type=mime_type(image_format), content=image)],
        temperature=TEMPERATURE,
    )
    text = response.text()
    if not isinstance(text, str) or not text:
        raise InvalidResponseError(f"Invalid response from {model.model_id}")
    return text


async def generate_filename(
    model: llm.Model,
    image: bytes,
    image_format: ImageFormat,
    *,
    max_retries: int = MAX_RETRIES,
    executor: concurrent.futures.Executor | None = None,
) -> str:
    """Generate a new filename for a receipt image.

    Any failure of the request itself is retried, immediately and unchanged,
    up to `max_retries` times; after that the last error is raised. A
    response that arrives but contains no tagged filename raises
    `ExtractionError` without retrying.

    Args:
        model: LLM model to send the image to
        image: Raw image content
        image_format: Format token of the image
        max_retries: Number of retries after the first attempt
        executor: Executor to run the blocking request on; the event loop's
            default executor when None

    Returns:
        The filename extracted from the model's response, without extension
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must not be negative, got {max_retries}")

    loop = asyncio.get_running_loop()
    attempt = 0
    while True:
        try:
            text = await loop.run_in_executor(executor, request_filename, model, image, image_format)
        except Exception as e:
            logging.debug(f"Attempt {attempt + 1} failed: {e}")
            if attempt >= max_retries:
                raise
            attempt += 1
            logging.warning(f"Retry attempt {attempt} for {model.model_id} call")
            continue
        return extract_filename(text)
