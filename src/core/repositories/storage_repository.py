"""Abstract contract for image file storage."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class ImageStorageRepository(ABC):
    """Contract for storing, deleting and addressing image files.

    Implementations could be S3, local disk, GCS, etc.
    Services depend on this interface, not the implementation, and
    nothing beyond these three operations is exposed to them.
    """

    @abstractmethod
    def save_file(self, *, file_stream: BinaryIO, filename: str, size: int) -> str:
        """Persist an uploaded file under a generated name.

        Args:
            file_stream: Readable binary stream with the file content
            filename: Caller-supplied filename (only its extension is used)
            size: Declared size in bytes

        Returns:
            Generated reference (bare filename) for later resolution

        Raises:
            FileSizeError: If size exceeds the configured maximum
            UnsupportedFileTypeError: If the extension is not allowed
            StorageError: If the backend write fails
            OperationTimeoutError: If the backend does not answer in time
        """

    @abstractmethod
    def delete_file(self, *, reference: str) -> None:
        """Delete a stored file.

        Args:
            reference: Bare filename or full locator returned by get_url

        Raises:
            InvalidReferenceError: If the reference contains traversal tokens
            NotFoundError: If the file does not exist
            StorageError: If the backend delete fails
            OperationTimeoutError: If the backend does not answer in time
        """

    @abstractmethod
    def get_url(self, reference: str) -> str:
        """Return the externally fetchable URL for a reference.

        Never performs I/O and never fails. Resolving an already
        resolved URL returns the same URL.
        """
