"""Business logic for product image deletion.

The stored file is removed first on a best-effort basis; the image record
is always removed afterwards so no visible listing outlives a delete.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_metadata import DynamoDBImageMetadata
from core.infrastructure.aws.dynamodb_products import DynamoDBProducts
from core.infrastructure.storage_factory import build_image_storage
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.product_repository import ProductRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.ownership import get_owned_image

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting product images."""

    def __init__(
        self,
        *,
        storage: ImageStorageRepository | None = None,
        metadata: ProductImageRepository | None = None,
        products: ProductRepository | None = None,
    ) -> None:
        self.storage = storage or build_image_storage()
        self.metadata = metadata or DynamoDBImageMetadata()
        self.products = products or DynamoDBProducts()

    def delete_image(self, *, image_id: str, requestor_id: str) -> None:
        """Delete an image file and its record.

        The deletion flow is:
        1. Fetch the record to confirm the image exists
        2. Verify the owning product belongs to the requestor
        3. Delete the stored file (failures are logged, not raised)
        4. Delete the record

        Raises:
            NotFoundError: If the image or its product does not exist
            ForbiddenError: If the product belongs to another vendor
            MetadataOperationFailedError: If the record cannot be deleted
            OperationTimeoutError: If a metadata call times out
        """
        logger.debug(
            "Starting image deletion",
            extra={"image_id": image_id, "requestor_id": requestor_id},
        )

        image = get_owned_image(
            self.metadata,
            self.products,
            image_id=image_id,
            requestor_id=requestor_id,
        )

        try:
            self.storage.delete_file(reference=image.image_url)
        except Exception:
            logger.warning(
                "Failed to delete image file; removing record anyway",
                extra={"image_id": image_id, "image_url": image.image_url},
                exc_info=True,
            )

        self.metadata.remove_image(image_id=image_id)

        logger.info("Image deleted successfully", extra={"image_id": image_id})
