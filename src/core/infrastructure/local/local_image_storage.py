"""Filesystem-backed implementation of ImageStorageRepository."""

from collections.abc import Collection
import os
from pathlib import Path
import shutil
from typing import BinaryIO

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError, StorageError
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_LOCAL_BASE_URL,
    DEFAULT_UPLOAD_DIR,
    ENV_IMAGE_BASE_URL,
    ENV_IMAGE_UPLOAD_DIR,
    ERROR_CODE_FILE_DELETE_FAILED,
    ERROR_CODE_FILE_NOT_FOUND,
    ERROR_CODE_FILE_SAVE_FAILED,
)
from core.utils.filenames import (
    extract_reference_name,
    generate_stored_filename,
    trailing_segment,
    validate_upload,
)
from core.utils.settings import get_allowed_extensions, get_max_file_size

logger = Logger(UTC=True)


class LocalImageStorage(ImageStorageRepository):
    """Image storage on the local filesystem, served under a base URL."""

    def __init__(
        self,
        upload_dir: str | Path | None = None,
        base_url: str | None = None,
        *,
        max_file_size: int | None = None,
        allowed_extensions: Collection[str] | None = None,
    ) -> None:
        """Create storage rooted at upload_dir, creating the directory if needed."""
        self._upload_dir = Path(
            upload_dir or os.getenv(ENV_IMAGE_UPLOAD_DIR, DEFAULT_UPLOAD_DIR)
        )
        self._base_url = (
            base_url or os.getenv(ENV_IMAGE_BASE_URL, DEFAULT_LOCAL_BASE_URL)
        ).rstrip("/")
        self._max_file_size = max_file_size or get_max_file_size()
        self._allowed_extensions = frozenset(allowed_extensions or get_allowed_extensions())

        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RuntimeError(
                f"Failed to create upload directory {self._upload_dir}"
            ) from exc

    def save_file(self, *, file_stream: BinaryIO, filename: str, size: int) -> str:
        """Copy the stream into the upload directory under a generated name."""
        extension = validate_upload(
            filename=filename,
            size=size,
            max_size=self._max_file_size,
            allowed_extensions=self._allowed_extensions,
        )
        stored_name = generate_stored_filename(extension)
        path = self._upload_dir / stored_name

        logger.debug("Saving image file", extra={"path": str(path), "size": size})

        try:
            destination = path.open("xb")
        except OSError as exc:
            logger.error("Failed to create image file", extra={"path": str(path)})
            raise StorageError(
                message="Unable to save image at this time",
                error_code=ERROR_CODE_FILE_SAVE_FAILED,
                details={"filename": stored_name},
            ) from exc

        try:
            with destination:
                shutil.copyfileobj(file_stream, destination)
        except Exception as exc:
            logger.exception("Failed to write image file")
            self._remove_partial(path)
            raise StorageError(
                message="Unable to save image at this time",
                error_code=ERROR_CODE_FILE_SAVE_FAILED,
                details={"filename": stored_name},
            ) from exc
        except BaseException:
            self._remove_partial(path)
            raise

        logger.info("Image file saved", extra={"stored_name": stored_name})
        return stored_name

    def delete_file(self, *, reference: str) -> None:
        """Remove a stored file from the upload directory."""
        stored_name = extract_reference_name(reference)
        path = self._upload_dir / stored_name

        logger.debug("Deleting image file", extra={"path": str(path)})

        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NotFoundError(
                message="Image file not found",
                error_code=ERROR_CODE_FILE_NOT_FOUND,
                details={"filename": stored_name},
            ) from exc
        except OSError as exc:
            logger.error("Failed to delete image file", extra={"path": str(path)})
            raise StorageError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_FILE_DELETE_FAILED,
                details={"filename": stored_name},
            ) from exc

        logger.info("Image file deleted", extra={"stored_name": stored_name})

    def get_url(self, reference: str) -> str:
        """Join the base URL with the stored filename."""
        return f"{self._base_url}/{trailing_segment(reference)}"

    def _remove_partial(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning(
                "Failed to remove partially written file",
                extra={"path": str(path)},
            )
