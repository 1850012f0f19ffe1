"""Environment-driven runtime settings.

Values are read on every call so a Lambda container picks up configuration
set at cold start, and tests can override them with ``monkeypatch.setenv``.
"""

import os

from botocore.config import Config

from core.utils.constants import (
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_READ_TIMEOUT,
    ENV_AWS_CONNECT_TIMEOUT,
    ENV_AWS_READ_TIMEOUT,
    ENV_IMAGE_ALLOWED_EXTENSIONS,
    ENV_IMAGE_MAX_FILE_SIZE,
)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got '{raw}'") from exc

    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}")

    return value


def get_max_file_size() -> int:
    """Maximum accepted upload size in bytes."""
    return _int_from_env(ENV_IMAGE_MAX_FILE_SIZE, DEFAULT_MAX_FILE_SIZE)


def get_allowed_extensions() -> frozenset[str]:
    """Allowed (lowercase, dot-less) image extensions.

    The override may only narrow the default set; unknown extensions are
    ignored so the stored-file naming convention stays intact.
    """
    raw = os.getenv(ENV_IMAGE_ALLOWED_EXTENSIONS)
    if not raw:
        return DEFAULT_ALLOWED_EXTENSIONS

    requested = {ext.strip().lower().lstrip(".") for ext in raw.split(",")}
    allowed = frozenset(ext for ext in requested if ext in DEFAULT_ALLOWED_EXTENSIONS)

    return allowed or DEFAULT_ALLOWED_EXTENSIONS


def get_boto_config() -> Config:
    """botocore client config with bounded connect/read timeouts and no retries."""
    return Config(
        connect_timeout=_int_from_env(ENV_AWS_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
        read_timeout=_int_from_env(ENV_AWS_READ_TIMEOUT, DEFAULT_READ_TIMEOUT),
        retries={"max_attempts": DEFAULT_MAX_ATTEMPTS, "mode": "standard"},
    )
