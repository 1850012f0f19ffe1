"""Business logic for changing the display position of a product image."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_metadata import DynamoDBImageMetadata
from core.infrastructure.aws.dynamodb_products import DynamoDBProducts
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.product_repository import ProductRepository
from core.utils.ownership import get_owned_image
from core.utils.validators import validate_position

logger = Logger(UTC=True)


class PositionService:
    """Application service responsible for image ordering.

    Positions are caller-managed: sibling images are never re-sequenced
    and duplicate positions are allowed.
    """

    def __init__(
        self,
        *,
        metadata: ProductImageRepository | None = None,
        products: ProductRepository | None = None,
    ) -> None:
        self.metadata = metadata or DynamoDBImageMetadata()
        self.products = products or DynamoDBProducts()

    def update_position(self, *, image_id: str, requestor_id: str, position: int) -> None:
        """Set a new position on an image owned by the requestor.

        Raises:
            InvalidPositionError: If position is negative
            NotFoundError: If the image or its product does not exist
            ForbiddenError: If the product belongs to another vendor
            MetadataOperationFailedError: If the update fails
        """
        validate_position(position)

        get_owned_image(
            self.metadata,
            self.products,
            image_id=image_id,
            requestor_id=requestor_id,
        )

        self.metadata.update_position(image_id=image_id, position=position)

        logger.info(
            "Image position updated",
            extra={"image_id": image_id, "position": position},
        )
