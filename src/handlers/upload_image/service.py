"""Business logic for product image upload operations.

This module coordinates ownership checks, file storage, and metadata
persistence for image uploads while translating failures into
domain-specific errors.
"""

import uuid
from typing import BinaryIO

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_metadata import DynamoDBImageMetadata
from core.infrastructure.aws.dynamodb_products import DynamoDBProducts
from core.infrastructure.storage_factory import build_image_storage
from core.models.errors import (
    ImageServiceError,
    MetadataOperationFailedError,
)
from core.models.image import ProductImage, ProductImageResponse
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.product_repository import ProductRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_POSITION,
    ERROR_CODE_METADATA_CREATE_FAILED,
    IMAGE_ID_PREFIX,
)
from core.utils.ownership import get_owned_product
from core.utils.time import utc_now_iso
from core.utils.validators import validate_position

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for product image uploads.

    This service orchestrates:
    - Position validation
    - Product ownership verification
    - Saving the file to storage
    - Persisting the image record
    - Removing the stored file when the record cannot be saved
    """

    def __init__(
        self,
        *,
        storage: ImageStorageRepository | None = None,
        metadata: ProductImageRepository | None = None,
        products: ProductRepository | None = None,
    ) -> None:
        """Initialize the upload service with required infrastructure dependencies."""
        self.storage = storage or build_image_storage()
        self.metadata = metadata or DynamoDBImageMetadata()
        self.products = products or DynamoDBProducts()

    @staticmethod
    def generate_image_id() -> str:
        """Generate a unique image identifier."""
        return f"{IMAGE_ID_PREFIX}{uuid.uuid4().hex}"

    def upload_image(
        self,
        *,
        product_id: str,
        requestor_id: str,
        file_stream: BinaryIO,
        filename: str,
        size: int,
        position: int = DEFAULT_POSITION,
    ) -> ProductImageResponse:
        """Store an image file and attach it to a product.

        The upload flow is:
        1. Reject negative positions
        2. Verify the product exists and belongs to the requestor
        3. Save the file to storage (errors propagate unchanged)
        4. Persist the image record
        5. Delete the stored file if step 4 fails or is interrupted

        Args:
            product_id: Product the image belongs to
            requestor_id: Authenticated vendor identifier
            file_stream: Readable binary stream with the image content
            filename: Caller-supplied filename
            size: Declared size in bytes
            position: Display order sort key

        Returns:
            The created image with its resolved URL

        Raises:
            InvalidPositionError: If position is negative
            NotFoundError: If the product does not exist
            ForbiddenError: If the product belongs to another vendor
            FileSizeError: If the file is too large
            UnsupportedFileTypeError: If the file type is not allowed
            StorageError: If storage fails
            OperationTimeoutError: If storage or metadata calls time out
            MetadataOperationFailedError: If the record cannot be persisted
        """
        logger.debug(
            "Starting image upload",
            extra={"product_id": product_id, "requestor_id": requestor_id},
        )

        # Step 1: Validate position before anything reaches storage
        validate_position(position)

        # Step 2: Verify ownership
        get_owned_product(
            self.products,
            product_id=product_id,
            requestor_id=requestor_id,
        )

        # Step 3: Save file to storage
        stored_name = self.storage.save_file(
            file_stream=file_stream,
            filename=filename,
            size=size,
        )

        # Step 4: Persist image record (compensate on failure)
        image = ProductImage(
            image_id=self.generate_image_id(),
            product_id=product_id,
            image_url=stored_name,
            position=position,
            created_at=utc_now_iso(),
        )

        try:
            self.metadata.create_image(image=image)
        except ImageServiceError:
            logger.exception(
                "Failed to persist image record",
                extra={"image_id": image.image_id},
            )
            self._discard_stored_file(stored_name)
            raise
        except Exception as exc:
            logger.exception(
                "Failed to persist image record",
                extra={"image_id": image.image_id},
            )
            self._discard_stored_file(stored_name)
            raise MetadataOperationFailedError(
                message="Unable to save image metadata",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"image_id": image.image_id},
            ) from exc
        except BaseException:
            # Interrupted between phases; the stored file must not outlive it
            self._discard_stored_file(stored_name)
            raise

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": image.image_id, "product_id": product_id},
        )

        return ProductImageResponse(
            id=image.image_id,
            image_url=self.storage.get_url(stored_name),
            position=image.position,
        )

    def _discard_stored_file(self, stored_name: str) -> None:
        """Best-effort removal of a file whose record was never created."""
        try:
            self.storage.delete_file(reference=stored_name)
        except Exception:
            logger.warning(
                "Failed to clean up stored image after metadata failure",
                extra={"stored_name": stored_name},
            )
