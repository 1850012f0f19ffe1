"""Upload validation and stored-file naming.

Stored names never derive from caller input beyond the lowercased
extension, which blocks path traversal and name collisions.
"""

import posixpath
import uuid
from collections.abc import Collection

from aws_lambda_powertools import Logger

from core.models.errors import (
    FileSizeError,
    InvalidReferenceError,
    UnsupportedFileTypeError,
)
from core.utils.constants import STORED_FILENAME_ID_LENGTH, format_file_size
from core.utils.time import unix_timestamp

logger = Logger(UTC=True)


def trailing_segment(reference: str) -> str:
    """Return the last path segment of a filename, key or URL."""
    cleaned = reference.strip().replace("\\", "/")
    cleaned = cleaned.split("?", 1)[0].split("#", 1)[0]
    return cleaned.rstrip("/").rsplit("/", 1)[-1]


def get_extension(filename: str) -> str:
    """Return the lowercase extension of a filename without the dot."""
    _, ext = posixpath.splitext(trailing_segment(filename))
    return ext.lower().lstrip(".")


def validate_upload(
    *,
    filename: str,
    size: int,
    max_size: int,
    allowed_extensions: Collection[str],
) -> str:
    """Check declared size and extension of an upload.

    Returns:
        The normalized extension

    Raises:
        FileSizeError: If size exceeds max_size
        UnsupportedFileTypeError: If the extension is not allowed
    """
    if size > max_size:
        logger.warning(
            "Upload rejected: file too large",
            extra={"size": size, "max_size": max_size},
        )
        raise FileSizeError(
            message=(
                f"File size exceeds maximum allowed size of {max_size} bytes "
                f"({format_file_size(max_size)})"
            ),
            details={"size": size, "max_size": max_size},
        )

    ext = get_extension(filename)
    if ext not in allowed_extensions:
        logger.warning(
            "Upload rejected: unsupported file type",
            extra={"extension": ext},
        )
        raise UnsupportedFileTypeError(
            message=(
                f"File type '{ext or 'unknown'}' not allowed. "
                f"Allowed types: {', '.join(sorted(allowed_extensions))}"
            ),
            details={"extension": ext},
        )

    return ext


def generate_stored_filename(extension: str) -> str:
    """Generate `<unix_timestamp>_<8 hex chars>.<ext>`."""
    short_id = uuid.uuid4().hex[:STORED_FILENAME_ID_LENGTH]
    return f"{unix_timestamp()}_{short_id}.{extension.lower()}"


def extract_reference_name(reference: str) -> str:
    """Return the stored filename addressed by a reference.

    Raises:
        InvalidReferenceError: If the reference is empty or contains `..`
    """
    if not reference or ".." in reference:
        raise InvalidReferenceError(details={"reference": reference})

    name = trailing_segment(reference)
    if not name:
        raise InvalidReferenceError(details={"reference": reference})

    return name
