"""DynamoDB-backed implementation of ProductRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError, ConnectTimeoutError, ReadTimeoutError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import MetadataOperationFailedError, OperationTimeoutError
from core.models.product import Product
from core.repositories.product_repository import ProductRepository
from core.utils.constants import (
    ENV_PRODUCTS_TABLE_NAME,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    ERROR_CODE_PRODUCT_FETCH_FAILED,
)

logger = Logger(UTC=True)


class DynamoDBProducts(ProductRepository):
    """Product lookups against the catalog's DynamoDB table."""

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(
            table_env_var=ENV_PRODUCTS_TABLE_NAME
        )

    def fetch_product(self, *, product_id: str) -> Product | None:
        logger.debug("Fetching product", extra={"product_id": product_id})

        try:
            response = self._db.get_item(key={"product_id": product_id})
        except (ConnectTimeoutError, ReadTimeoutError) as exc:
            logger.error("DynamoDB get_item timed out", extra={"product_id": product_id})
            raise OperationTimeoutError(
                message="Timed out while retrieving product",
                details={"product_id": product_id},
            ) from exc
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"product_id": product_id})
            raise MetadataOperationFailedError(
                message="Unable to retrieve product",
                error_code=ERROR_CODE_PRODUCT_FETCH_FAILED,
                details={"product_id": product_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching product")
            raise MetadataOperationFailedError(
                message="Unable to retrieve product",
                error_code=ERROR_CODE_PRODUCT_FETCH_FAILED,
                details={"product_id": product_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        try:
            return Product.model_validate(item)
        except Exception as exc:
            logger.error("Invalid product format", extra={"product_id": product_id})
            raise MetadataOperationFailedError(
                message="Invalid product format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"product_id": product_id},
            ) from exc
