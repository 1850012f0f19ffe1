"""Abstract contract for product image metadata persistence."""

from abc import ABC, abstractmethod

from core.models.image import ProductImage


class ProductImageRepository(ABC):
    """Contract for storing and retrieving product image records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_image(self, *, image: ProductImage) -> None:
        """Persist a new image record.

        Raises:
            MetadataOperationFailedError: If creation fails
            OperationTimeoutError: If the store does not answer in time
        """

    @abstractmethod
    def fetch_image(self, *, image_id: str) -> ProductImage | None:
        """Fetch a single image record.

        Returns:
            The record or None if not found

        Raises:
            MetadataOperationFailedError: If fetch fails
        """

    @abstractmethod
    def list_product_images(self, *, product_id: str) -> list[ProductImage]:
        """List all image records of a product.

        Returns:
            Records sorted by position, then created_at, then image_id

        Raises:
            MetadataOperationFailedError: If the query fails
        """

    @abstractmethod
    def update_position(self, *, image_id: str, position: int) -> None:
        """Set a new position on an existing image record.

        Raises:
            NotFoundError: If the record no longer exists
            MetadataOperationFailedError: If the update fails
        """

    @abstractmethod
    def remove_image(self, *, image_id: str) -> None:
        """Remove an image record.

        Raises:
            MetadataOperationFailedError: If deletion fails
        """

    @abstractmethod
    def remove_product_images(self, *, product_id: str) -> int:
        """Remove all image records of a product (product deletion cascade).

        Returns:
            Number of records removed

        Raises:
            MetadataOperationFailedError: If deletion fails
        """
