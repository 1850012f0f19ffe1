"""Vendor ownership checks shared by the image services."""

from aws_lambda_powertools import Logger

from core.models.errors import ForbiddenError, NotFoundError
from core.models.image import ProductImage
from core.models.product import Product
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.product_repository import ProductRepository
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND, ERROR_CODE_PRODUCT_NOT_FOUND

logger = Logger(UTC=True)


def get_owned_product(
    products: ProductRepository,
    *,
    product_id: str,
    requestor_id: str,
) -> Product:
    """Return the product if it exists and belongs to the requestor.

    Authorization is identity equality between the product owner and the
    requestor; role checks happen before the services are called.

    Raises:
        NotFoundError: If the product does not exist
        ForbiddenError: If the product belongs to another vendor
    """
    product = products.fetch_product(product_id=product_id)

    if product is None:
        logger.warning("Product not found", extra={"product_id": product_id})
        raise NotFoundError(
            message="Product not found",
            error_code=ERROR_CODE_PRODUCT_NOT_FOUND,
            details={"product_id": product_id},
        )

    if product.owner_id != requestor_id:
        logger.warning(
            "Product ownership mismatch",
            extra={"product_id": product_id, "requestor_id": requestor_id},
        )
        raise ForbiddenError(
            message="Product does not belong to this vendor",
            details={"product_id": product_id},
        )

    return product


def get_owned_image(
    metadata: ProductImageRepository,
    products: ProductRepository,
    *,
    image_id: str,
    requestor_id: str,
) -> ProductImage:
    """Return an image record whose product belongs to the requestor.

    Raises:
        NotFoundError: If the image or its product does not exist
        ForbiddenError: If the product belongs to another vendor
    """
    image = metadata.fetch_image(image_id=image_id)

    if image is None:
        logger.warning("Image not found", extra={"image_id": image_id})
        raise NotFoundError(
            message="Image not found",
            error_code=ERROR_CODE_IMAGE_NOT_FOUND,
            details={"image_id": image_id},
        )

    get_owned_product(products, product_id=image.product_id, requestor_id=requestor_id)
    return image
