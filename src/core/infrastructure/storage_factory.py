"""Select the image storage backend from configuration."""

import os

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_STORAGE_BACKEND,
    ENV_IMAGE_STORAGE_BACKEND,
    STORAGE_BACKEND_LOCAL,
    STORAGE_BACKEND_S3,
)

logger = Logger(UTC=True)


def build_image_storage() -> ImageStorageRepository:
    """Instantiate the backend named by IMAGE_STORAGE_BACKEND.

    Raises:
        RuntimeError: If the backend name is unknown
    """
    backend = os.getenv(ENV_IMAGE_STORAGE_BACKEND, DEFAULT_STORAGE_BACKEND).strip().lower()

    if backend == STORAGE_BACKEND_S3:
        storage: ImageStorageRepository = S3ImageStorage()
    elif backend == STORAGE_BACKEND_LOCAL:
        storage = LocalImageStorage()
    else:
        raise RuntimeError(
            f"{ENV_IMAGE_STORAGE_BACKEND} must be '{STORAGE_BACKEND_LOCAL}' "
            f"or '{STORAGE_BACKEND_S3}', got '{backend}'"
        )

    logger.debug("Image storage backend selected", extra={"backend": backend})
    return storage
