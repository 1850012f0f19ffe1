"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_POSITION = "INVALID_POSITION"
ERROR_CODE_UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_REFERENCE = "INVALID_REFERENCE"

# Access Errors
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_FORBIDDEN = "FORBIDDEN"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
ERROR_CODE_PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
ERROR_CODE_FILE_NOT_FOUND = "FILE_NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_FILE_SAVE_FAILED = "FILE_SAVE_FAILED"
ERROR_CODE_FILE_DELETE_FAILED = "FILE_DELETE_FAILED"
ERROR_CODE_TIMEOUT = "OPERATION_TIMEOUT"

# Metadata / DynamoDB Errors
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_UPDATE_FAILED = "METADATA_UPDATE_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT = "METADATA_INVALID_FORMAT"
ERROR_CODE_PRODUCT_FETCH_FAILED = "PRODUCT_FETCH_FAILED"


# ============================================================================
# File Upload Constraints
# ============================================================================

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes


MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
}

DEFAULT_ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    ext for extensions in MIME_TYPE_EXTENSION_MAP.values() for ext in extensions
)

# Stored files are named <unix_timestamp>_<8 hex chars>.<ext>
STORED_FILENAME_ID_LENGTH = 8
STORED_FILENAME_PATTERN = r"^\d+_[0-9a-f]{8}\.(jpg|jpeg|png|gif|webp)$"

# ============================================================================
# Image Metadata Constraints
# ============================================================================

DEFAULT_POSITION = 0
IMAGE_ID_PREFIX = "img_"
PRODUCT_IMAGES_INDEX_NAME = "product-images-index"

# ============================================================================
# Access Control
# ============================================================================

VENDOR_ROLE = "vendor"

# ============================================================================
# Storage Backends
# ============================================================================

STORAGE_BACKEND_LOCAL = "local"
STORAGE_BACKEND_S3 = "s3"

DEFAULT_STORAGE_BACKEND = STORAGE_BACKEND_LOCAL
DEFAULT_UPLOAD_DIR = "./uploads"
DEFAULT_LOCAL_BASE_URL = "http://localhost:8080/uploads"
DEFAULT_S3_KEY_PREFIX = "product-images/"

# ============================================================================
# Timeouts (seconds)
# ============================================================================

DEFAULT_CONNECT_TIMEOUT = 5
DEFAULT_READ_TIMEOUT = 10
DEFAULT_MAX_ATTEMPTS = 1

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_CONNECT_TIMEOUT = "AWS_CONNECT_TIMEOUT"
ENV_AWS_READ_TIMEOUT = "AWS_READ_TIMEOUT"
ENV_IMAGE_STORAGE_BACKEND = "IMAGE_STORAGE_BACKEND"
ENV_IMAGE_UPLOAD_DIR = "IMAGE_UPLOAD_DIR"
ENV_IMAGE_BASE_URL = "IMAGE_BASE_URL"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_S3_KEY_PREFIX = "IMAGE_S3_KEY_PREFIX"
ENV_IMAGE_MAX_FILE_SIZE = "IMAGE_MAX_FILE_SIZE"
ENV_IMAGE_ALLOWED_EXTENSIONS = "IMAGE_ALLOWED_EXTENSIONS"
ENV_PRODUCT_IMAGES_TABLE_NAME = "PRODUCT_IMAGES_TABLE_NAME"
ENV_PRODUCTS_TABLE_NAME = "PRODUCTS_TABLE_NAME"

# ============================================================================
# Helper Functions
# ============================================================================


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
