"""
E2E fixtures for the product image API deployed to LocalStack.

Every test is skipped unless LocalStack exposes the API and vendor tokens
are provided through E2E_VENDOR_A_TOKEN / E2E_VENDOR_B_TOKEN.
"""

import logging
import os

import boto3
import pytest
from botocore.exceptions import ClientError

from .e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

S3_IMAGE_BUCKET_NAME = "product-images-snd"
IMAGES_TABLE_NAME = "product-images-snd"
PRODUCTS_TABLE_NAME = "products-snd"
ENDPOINT_BASE_URL = "http://localhost:4566"

SAMPLE_JPEG_BASE64 = "/9j/4AAQSkZJRgABAQEAYABgAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/2wBDAQkJCQwLDBgNDRgyIRwhMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjL/wAARCAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAAAAAAAAAAAAA/8VAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwCwAA8A/9k="

# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL)

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "product-image" in api["name"])
        api_id = api["id"]

        endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api_id}/snd/_user_request_"

        return {"api_id": api_id, "endpoint": endpoint, "stage": "snd"}
    except Exception as e:
        logger.warning(f"Could not get API details from LocalStack: {e}")
        pytest.skip(f"Could not get API details from LocalStack: {e}")


def _token(name: str) -> str:
    token = os.getenv(name)
    if not token:
        pytest.skip(f"{name} is not set")
    return token


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture
def vendor_a_client(api_details):
    """Client authenticated as the vendor owning E2E product A"""
    return E2EAPIClient(
        api_details["endpoint"],
        {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {_token('E2E_VENDOR_A_TOKEN')}",
        },
    )


@pytest.fixture
def vendor_b_client(api_details):
    """Client authenticated as a second vendor"""
    return E2EAPIClient(
        api_details["endpoint"],
        {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {_token('E2E_VENDOR_B_TOKEN')}",
        },
    )


@pytest.fixture
def public_client(api_details):
    """Client without credentials"""
    return E2EAPIClient(api_details["endpoint"], {"Content-Type": "application/json"})


@pytest.fixture
def e2e_product_id(api_details):
    """Product owned by the vendor behind E2E_VENDOR_A_TOKEN."""
    product_id = "e2e-product-a"
    owner_id = os.getenv("E2E_VENDOR_A_ID", "e2e-vendor-a")

    table = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL).Table(PRODUCTS_TABLE_NAME)
    table.put_item(Item={"product_id": product_id, "owner_id": owner_id, "name": "E2E product"})

    return product_id


@pytest.fixture(scope="function", autouse=True)
def cleanup_storage_after_each_test(api_details):
    """Clean S3 and DynamoDB to prevent test data leakage."""
    yield

    _cleanup_s3()
    _cleanup_images_table()


def _cleanup_s3():
    """Clean all objects from S3 bucket"""
    logger.info("Cleaning S3 bucket: %s", S3_IMAGE_BUCKET_NAME)

    s3_client = boto3.client("s3", endpoint_url=ENDPOINT_BASE_URL)

    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        deleted = 0
        for page in paginator.paginate(Bucket=S3_IMAGE_BUCKET_NAME):
            for obj in page.get("Contents", []):
                s3_client.delete_object(Bucket=S3_IMAGE_BUCKET_NAME, Key=obj["Key"])
                deleted += 1

        logger.info("Deleted %d objects from S3 bucket", deleted)

    except ClientError as err:
        logger.error("Failed to cleanup S3 bucket: %s", S3_IMAGE_BUCKET_NAME, exc_info=err)


def _cleanup_images_table():
    """Delete all items from the product images table."""
    logger.info("Cleaning DynamoDB table: %s", IMAGES_TABLE_NAME)

    table = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL).Table(IMAGES_TABLE_NAME)

    try:
        deleted = 0
        start_key = None

        while True:
            scan_kwargs = {"ProjectionExpression": "image_id"}
            if start_key:
                scan_kwargs["ExclusiveStartKey"] = start_key

            response = table.scan(**scan_kwargs)
            for item in response.get("Items", []):
                table.delete_item(Key={"image_id": item["image_id"]})
                deleted += 1

            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break

        logger.info("Deleted %d items from DynamoDB table", deleted)

    except ClientError as err:
        logger.error(
            "Failed to cleanup DynamoDB table: %s",
            IMAGES_TABLE_NAME,
            exc_info=err,
        )


# ============================================================================
# Sample Image Data
# ============================================================================


@pytest.fixture
def upload_valid_payload() -> dict:
    return {"image_name": "sample.jpg", "file": SAMPLE_JPEG_BASE64}
