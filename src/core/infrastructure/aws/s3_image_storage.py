"""S3-backed implementation of ImageStorageRepository."""

from collections.abc import Collection
import os
from typing import BinaryIO

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError, ConnectTimeoutError, ReadTimeoutError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    NotFoundError,
    OperationTimeoutError,
    StorageError,
)
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_S3_KEY_PREFIX,
    ENV_IMAGE_BASE_URL,
    ENV_IMAGE_S3_KEY_PREFIX,
    ERROR_CODE_FILE_DELETE_FAILED,
    ERROR_CODE_FILE_NOT_FOUND,
    ERROR_CODE_FILE_SAVE_FAILED,
    MIME_TYPE_EXTENSION_MAP,
)
from core.utils.filenames import (
    extract_reference_name,
    generate_stored_filename,
    trailing_segment,
    validate_upload,
)
from core.utils.settings import get_allowed_extensions, get_max_file_size

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        *,
        key_prefix: str | None = None,
        public_base_url: str | None = None,
        max_file_size: int | None = None,
        allowed_extensions: Collection[str] | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

        prefix = key_prefix
        if prefix is None:
            prefix = os.getenv(ENV_IMAGE_S3_KEY_PREFIX, DEFAULT_S3_KEY_PREFIX)
        prefix = prefix.strip("/")
        self._key_prefix = f"{prefix}/" if prefix else ""

        base_url = public_base_url or os.getenv(ENV_IMAGE_BASE_URL)
        if not base_url:
            region = self._s3.region or "us-east-1"
            base_url = f"https://{self._s3.bucket}.s3.{region}.amazonaws.com"
        self._public_base_url = base_url.rstrip("/")

        self._max_file_size = max_file_size or get_max_file_size()
        self._allowed_extensions = frozenset(allowed_extensions or get_allowed_extensions())

    def save_file(self, *, file_stream: BinaryIO, filename: str, size: int) -> str:
        """Upload the stream to S3 under a generated name and return that name."""
        extension = validate_upload(
            filename=filename,
            size=size,
            max_size=self._max_file_size,
            allowed_extensions=self._allowed_extensions,
        )
        stored_name = generate_stored_filename(extension)
        key = self._key_for(stored_name)

        logger.debug(
            "Uploading image file",
            extra={"key": key, "size": size},
        )

        try:
            self._s3.put_object(
                key=key,
                body=file_stream,
                content_type=self._content_type(extension),
            )
        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            logger.error("S3 upload timed out", extra={"key": key})
            self._discard_partial(key)
            raise OperationTimeoutError(
                message="Timed out while saving image",
                details={"key": key},
            ) from exc
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            self._discard_partial(key)
            raise StorageError(
                message="Unable to save image at this time",
                error_code=ERROR_CODE_FILE_SAVE_FAILED,
                details={"key": key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error uploading image")
            self._discard_partial(key)
            raise StorageError(
                message="Unable to save image at this time",
                error_code=ERROR_CODE_FILE_SAVE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Image file uploaded", extra={"key": key})
        return stored_name

    def delete_file(self, *, reference: str) -> None:
        """Delete an image object from S3, reporting missing objects."""
        stored_name = extract_reference_name(reference)
        key = self._key_for(stored_name)

        logger.debug("Deleting image file", extra={"key": key})

        try:
            # delete_object succeeds on missing keys, so check first
            self._s3.head_object(key=key)
            self._s3.delete_object(key=key)

        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            logger.error("S3 deletion timed out", extra={"key": key})
            raise OperationTimeoutError(
                message="Timed out while deleting image",
                details={"key": key},
            ) from exc

        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES:
                raise NotFoundError(
                    message="Image file not found",
                    error_code=ERROR_CODE_FILE_NOT_FOUND,
                    details={"key": key},
                ) from exc

            logger.error("S3 deletion failed", extra={"key": key})
            raise StorageError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_FILE_DELETE_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise StorageError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_FILE_DELETE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Image file deleted", extra={"key": key})

    def get_url(self, reference: str) -> str:
        """Return the public object URL for a stored name or URL."""
        return f"{self._public_base_url}/{self._key_for(trailing_segment(reference))}"

    def _key_for(self, stored_name: str) -> str:
        return f"{self._key_prefix}{stored_name}"

    def _discard_partial(self, key: str) -> None:
        """Remove an object a failed or timed-out put may have left behind."""
        try:
            self._s3.delete_object(key=key)
        except Exception:
            logger.warning(
                "Failed to discard partially uploaded object",
                extra={"key": key},
            )

    @staticmethod
    def _content_type(extension: str) -> str:
        for mime_type, extensions in MIME_TYPE_EXTENSION_MAP.items():
            if extension in extensions:
                return mime_type
        return "application/octet-stream"
