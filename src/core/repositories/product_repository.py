"""Abstract contract for product lookups."""

from abc import ABC, abstractmethod

from core.models.product import Product


class ProductRepository(ABC):
    """Read-only access to catalog products.

    The catalog itself is owned elsewhere; the image services only need to
    resolve a product and its owning vendor.
    """

    @abstractmethod
    def fetch_product(self, *, product_id: str) -> Product | None:
        """Fetch a product by id.

        Returns:
            The product or None if not found

        Raises:
            MetadataOperationFailedError: If the lookup fails
        """
