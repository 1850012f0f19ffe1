"""DynamoDB-backed implementation of ProductImageRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError, ConnectTimeoutError, ReadTimeoutError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import (
    MetadataOperationFailedError,
    NotFoundError,
    OperationTimeoutError,
)
from core.models.image import ProductImage
from core.repositories.metadata_repository import ProductImageRepository
from core.utils.constants import (
    ENV_PRODUCT_IMAGES_TABLE_NAME,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_UPDATE_FAILED,
    PRODUCT_IMAGES_INDEX_NAME,
)

Item = dict[str, Any]

logger = Logger(UTC=True)

_TIMEOUT_ERRORS = (ConnectTimeoutError, ReadTimeoutError)


def sort_images(images: list[ProductImage]) -> list[ProductImage]:
    """Order images by position; ties fall back to creation time, then id."""
    return sorted(images, key=lambda image: (image.position, image.created_at, image.image_id))


class DynamoDBImageMetadata(ProductImageRepository):
    """DynamoDB-backed product image records with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            table_env_var=ENV_PRODUCT_IMAGES_TABLE_NAME
        )

    def create_image(self, *, image: ProductImage) -> None:
        """Create an image record.

        Raises:
            MetadataOperationFailedError: If creation fails
            OperationTimeoutError: If DynamoDB does not answer in time
        """
        logger.debug(
            "Creating image record",
            extra={"image_id": image.image_id, "product_id": image.product_id},
        )

        try:
            self._db.put_item(
                item=image.model_dump(),
                condition_expression="attribute_not_exists(image_id)",
            )
            logger.info(
                "Image record created",
                extra={"image_id": image.image_id, "product_id": image.product_id},
            )

        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB put_item timed out", extra={"image_id": image.image_id})
            raise OperationTimeoutError(
                message="Timed out while saving image metadata",
                details={"image_id": image.image_id},
            ) from exc

        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"image_id": image.image_id})
            raise MetadataOperationFailedError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"image_id": image.image_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error creating image record")
            raise MetadataOperationFailedError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"image_id": image.image_id},
            ) from exc

    def fetch_image(self, *, image_id: str) -> ProductImage | None:
        """Fetch a single image record.

        Raises:
            MetadataOperationFailedError: If fetch fails
        """
        logger.debug("Fetching image record", extra={"image_id": image_id})

        try:
            response = self._db.get_item(key={"image_id": image_id})
        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB get_item timed out", extra={"image_id": image_id})
            raise OperationTimeoutError(
                message="Timed out while retrieving image metadata",
                details={"image_id": image_id},
            ) from exc
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching image record")
            raise MetadataOperationFailedError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        return self._to_image(item)

    def list_product_images(self, *, product_id: str) -> list[ProductImage]:
        """List every image of a product, ordered for display.

        NOTE:
        - The index is partitioned by product_id; all pages are read.
        - Ordering happens here because position is not an index key.
        """
        logger.debug("Listing product images", extra={"product_id": product_id})

        query_kwargs: dict[str, Any] = {
            "IndexName": PRODUCT_IMAGES_INDEX_NAME,
            "KeyConditionExpression": Key("product_id").eq(product_id),
        }

        items: list[Item] = []
        last_evaluated_key: dict[str, Any] | None = None

        try:
            while True:
                if last_evaluated_key:
                    query_kwargs["ExclusiveStartKey"] = last_evaluated_key

                response = self._db.query(**query_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise MetadataOperationFailedError(
                        message="Invalid query response from DynamoDB",
                        error_code=ERROR_CODE_METADATA_LIST_FAILED,
                        details={"product_id": product_id},
                    )

                items.extend(page_items)

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break

        except MetadataOperationFailedError:
            raise

        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB query timed out", extra={"product_id": product_id})
            raise OperationTimeoutError(
                message="Timed out while listing images",
                details={"product_id": product_id},
            ) from exc

        except ClientError as exc:
            logger.error("DynamoDB query failed", extra={"product_id": product_id})
            raise MetadataOperationFailedError(
                message="Unable to list images for this product",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"product_id": product_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error listing images")
            raise MetadataOperationFailedError(
                message="Unable to list images for this product",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"product_id": product_id},
            ) from exc

        images = sort_images([self._to_image(item) for item in items])

        logger.info(
            "Product images listed",
            extra={"product_id": product_id, "count": len(images)},
        )
        return images

    def update_position(self, *, image_id: str, position: int) -> None:
        """Set the position of an existing image record.

        Raises:
            NotFoundError: If the record no longer exists
            MetadataOperationFailedError: If the update fails
        """
        logger.debug(
            "Updating image position",
            extra={"image_id": image_id, "position": position},
        )

        try:
            self._db.update_item(
                key={"image_id": image_id},
                update_expression="SET #position = :position",
                condition_expression="attribute_exists(image_id)",
                expression_attribute_names={"#position": "position"},
                expression_attribute_values={":position": position},
            )
            logger.info(
                "Image position updated",
                extra={"image_id": image_id, "position": position},
            )

        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB update_item timed out", extra={"image_id": image_id})
            raise OperationTimeoutError(
                message="Timed out while updating image position",
                details={"image_id": image_id},
            ) from exc

        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise NotFoundError(
                    message="Image not found",
                    error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                    details={"image_id": image_id},
                ) from exc

            logger.error("DynamoDB update_item failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to update image position",
                error_code=ERROR_CODE_METADATA_UPDATE_FAILED,
                details={"image_id": image_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error updating image position")
            raise MetadataOperationFailedError(
                message="Unable to update image position",
                error_code=ERROR_CODE_METADATA_UPDATE_FAILED,
                details={"image_id": image_id},
            ) from exc

    def remove_image(self, *, image_id: str) -> None:
        """Remove an image record.

        Raises:
            MetadataOperationFailedError: If deletion fails
        """
        logger.debug("Removing image record", extra={"image_id": image_id})

        try:
            self._db.delete_item(key={"image_id": image_id})
            logger.info("Image record removed", extra={"image_id": image_id})

        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB delete_item timed out", extra={"image_id": image_id})
            raise OperationTimeoutError(
                message="Timed out while deleting image metadata",
                details={"image_id": image_id},
            ) from exc

        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"image_id": image_id})
            raise MetadataOperationFailedError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"image_id": image_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing image record")
            raise MetadataOperationFailedError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"image_id": image_id},
            ) from exc

    def remove_product_images(self, *, product_id: str) -> int:
        """Remove every image record of a product.

        Called when the product itself is deleted. Stored files are left in
        place.

        Raises:
            MetadataOperationFailedError: If the query or deletion fails
        """
        images = self.list_product_images(product_id=product_id)
        if not images:
            return 0

        logger.debug(
            "Removing product image records",
            extra={"product_id": product_id, "count": len(images)},
        )

        try:
            self._db.delete_items(keys=[{"image_id": image.image_id} for image in images])

        except _TIMEOUT_ERRORS as exc:
            logger.error("DynamoDB batch delete timed out", extra={"product_id": product_id})
            raise OperationTimeoutError(
                message="Timed out while deleting product images",
                details={"product_id": product_id},
            ) from exc

        except ClientError as exc:
            logger.error("DynamoDB batch delete failed", extra={"product_id": product_id})
            raise MetadataOperationFailedError(
                message="Unable to delete product images",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"product_id": product_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing product images")
            raise MetadataOperationFailedError(
                message="Unable to delete product images",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"product_id": product_id},
            ) from exc

        logger.info(
            "Product image records removed",
            extra={"product_id": product_id, "count": len(images)},
        )
        return len(images)

    @staticmethod
    def _to_image(item: Item) -> ProductImage:
        """Convert a DynamoDB item (numbers come back as Decimal) to a model."""
        try:
            return ProductImage(
                image_id=item["image_id"],
                product_id=item["product_id"],
                image_url=item["image_url"],
                position=int(item.get("position", 0)),
                created_at=item["created_at"],
            )
        except Exception as exc:
            logger.error(
                "Invalid image record format",
                extra={"image_id": item.get("image_id")},
            )
            raise MetadataOperationFailedError(
                message="Invalid image metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"image_id": item.get("image_id")},
            ) from exc
