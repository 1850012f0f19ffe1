"""
Business logic for listing the images of a product.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_metadata import DynamoDBImageMetadata
from core.infrastructure.storage_factory import build_image_storage
from core.models.image import ProductImageResponse
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.storage_repository import ImageStorageRepository

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for product image listings.

    Every call is a fresh read of the metadata store; records come back
    already ordered by position and only need their references resolved.
    """

    def __init__(
        self,
        *,
        metadata: ProductImageRepository | None = None,
        storage: ImageStorageRepository | None = None,
    ) -> None:
        self.metadata = metadata or DynamoDBImageMetadata()
        self.storage = storage or build_image_storage()

    def list_images(self, *, product_id: str) -> list[ProductImageResponse]:
        """Return the product's images ordered by position.

        An unknown product or a product with no images yields an empty list.
        """
        records = self.metadata.list_product_images(product_id=product_id)

        images = [
            ProductImageResponse(
                id=record.image_id,
                image_url=self.storage.get_url(record.image_url),
                position=record.position,
            )
            for record in records
        ]

        logger.info(
            "Product images listed",
            extra={"product_id": product_id, "count": len(images)},
        )

        return images
