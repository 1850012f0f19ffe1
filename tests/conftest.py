"""
Pytest configuration and fixtures for product image tests.
Provides AWS mocking, DynamoDB and S3 fixtures, and in-memory repositories.
"""

import base64
import os
from collections.abc import Callable
from typing import Any, BinaryIO

import boto3
import pytest
from moto import mock_aws

from core.models.errors import NotFoundError
from core.models.image import ProductImage
from core.models.product import Product
from core.repositories.metadata_repository import ProductImageRepository
from core.repositories.product_repository import ProductRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import PRODUCT_IMAGES_INDEX_NAME

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "product-images-test")
os.environ.setdefault("PRODUCT_IMAGES_TABLE_NAME", "product-images-test")
os.environ.setdefault("PRODUCTS_TABLE_NAME", "products-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "product-image-service")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ProductImages")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")

PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture(autouse=True)
def clean_image_settings(monkeypatch):
    """Run every test against default settings, never a real endpoint."""
    for name in (
        "AWS_ENDPOINT_URL",
        "IMAGE_BASE_URL",
        "IMAGE_MAX_FILE_SIZE",
        "IMAGE_ALLOWED_EXTENSIONS",
        "IMAGE_S3_KEY_PREFIX",
        "IMAGE_STORAGE_BACKEND",
        "IMAGE_UPLOAD_DIR",
        "AWS_CONNECT_TIMEOUT",
        "AWS_READ_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# AWS (moto)
# ============================================================================


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def images_table(dynamodb_resource):
    """Product images table keyed by image_id with a product_id index."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("PRODUCT_IMAGES_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "image_id", "AttributeType": "S"},
            {"AttributeName": "product_id", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": PRODUCT_IMAGES_INDEX_NAME,
                "KeySchema": [{"AttributeName": "product_id", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def products_table(dynamodb_resource):
    table = dynamodb_resource.create_table(
        TableName=os.getenv("PRODUCTS_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "product_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "product_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def put_product(products_table) -> Callable[..., dict[str, Any]]:
    """
    Helper to insert a catalog product.

    Usage:
        put_product("prod_1", owner_id="vendor-a")
    """

    def _put(product_id: str, *, owner_id: str, name: str = "Test product") -> dict[str, Any]:
        item = {"product_id": product_id, "owner_id": owner_id, "name": name, "is_active": True}
        products_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def put_image_item(images_table) -> Callable[..., dict[str, Any]]:
    """
    Helper to insert a raw image record.

    Usage:
        put_image_item("img_1", product_id="prod_1", position=2)
    """

    def _put(
        image_id: str,
        *,
        product_id: str,
        position: int = 0,
        image_url: str | None = None,
        created_at: str = "2024-01-01T10:00:00+00:00",
    ) -> dict[str, Any]:
        item = {
            "image_id": image_id,
            "product_id": product_id,
            "image_url": image_url or f"{image_id}.png",
            "position": position,
            "created_at": created_at,
        }
        images_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
    s3_client.create_bucket(Bucket=bucket_name)
    return bucket_name


@pytest.fixture
def s3_list_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    def _list() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


# ============================================================================
# In-memory repositories
# ============================================================================


class InMemoryStorage(ImageStorageRepository):
    """Storage double that records calls and can be told to fail."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.calls: list[str] = []
        self.save_error: BaseException | None = None
        self.delete_error: BaseException | None = None
        self._counter = 0

    def save_file(self, *, file_stream: BinaryIO, filename: str, size: int) -> str:
        self.calls.append("save")
        if self.save_error is not None:
            raise self.save_error

        self._counter += 1
        stored_name = f"1700000000_{self._counter:08x}.{filename.rsplit('.', 1)[-1].lower()}"
        self.files[stored_name] = file_stream.read()
        return stored_name

    def delete_file(self, *, reference: str) -> None:
        self.calls.append("delete")
        if self.delete_error is not None:
            raise self.delete_error

        name = reference.rsplit("/", 1)[-1]
        if name not in self.files:
            raise NotFoundError(message="Image file not found")
        del self.files[name]

    def get_url(self, reference: str) -> str:
        return f"https://cdn.test/{reference.rsplit('/', 1)[-1]}"


class InMemoryImageMetadata(ProductImageRepository):
    def __init__(self) -> None:
        self.images: dict[str, ProductImage] = {}
        self.create_error: BaseException | None = None
        self.remove_error: BaseException | None = None

    def create_image(self, *, image: ProductImage) -> None:
        if self.create_error is not None:
            raise self.create_error
        self.images[image.image_id] = image

    def fetch_image(self, *, image_id: str) -> ProductImage | None:
        return self.images.get(image_id)

    def list_product_images(self, *, product_id: str) -> list[ProductImage]:
        matches = [image for image in self.images.values() if image.product_id == product_id]
        return sorted(matches, key=lambda image: (image.position, image.created_at, image.image_id))

    def update_position(self, *, image_id: str, position: int) -> None:
        image = self.images.get(image_id)
        if image is None:
            raise NotFoundError(message="Image not found")
        self.images[image_id] = image.model_copy(update={"position": position})

    def remove_image(self, *, image_id: str) -> None:
        if self.remove_error is not None:
            raise self.remove_error
        self.images.pop(image_id, None)

    def remove_product_images(self, *, product_id: str) -> int:
        doomed = [key for key, image in self.images.items() if image.product_id == product_id]
        for image_id in doomed:
            del self.images[image_id]
        return len(doomed)


class InMemoryProducts(ProductRepository):
    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = {product.product_id: product for product in products or []}

    def fetch_product(self, *, product_id: str) -> Product | None:
        return self.products.get(product_id)


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def memory_metadata() -> InMemoryImageMetadata:
    return InMemoryImageMetadata()


@pytest.fixture
def memory_products() -> InMemoryProducts:
    """Products owned by vendor-a (prod_a) and vendor-b (prod_b)."""
    return InMemoryProducts(
        [
            Product(product_id="prod_a", owner_id="vendor-a", name="Lamp"),
            Product(product_id="prod_b", owner_id="vendor-b", name="Chair"),
        ]
    )


# ============================================================================
# Sample data
# ============================================================================


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    return base64.b64decode(PNG_BASE64)


@pytest.fixture
def sample_image_base64() -> str:
    return PNG_BASE64
