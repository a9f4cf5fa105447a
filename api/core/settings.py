"""
Environment-backed settings.

Everything is read lazily so tests can tweak `os.environ` with monkeypatch.
"""

from __future__ import annotations

import os

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MiB
DEFAULT_TEMP_BUCKET = "temp"
DEFAULT_PROPERTIES_BUCKET = "properties-images"


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def max_upload_bytes() -> int:
    value = env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def temp_bucket() -> str:
    return env_str("STORAGE_TEMP_BUCKET", DEFAULT_TEMP_BUCKET)


def properties_bucket() -> str:
    return env_str("STORAGE_PROPERTIES_BUCKET", DEFAULT_PROPERTIES_BUCKET)


def storage_endpoint_url() -> str | None:
    return env_str("STORAGE_ENDPOINT_URL") or None


def storage_public_base_url() -> str | None:
    """
    Base URL used to build object URLs, e.g. a CDN in front of the buckets.

    Falls back to `STORAGE_ENDPOINT_URL` (path-style URLs) when unset.
    """
    return env_str("STORAGE_PUBLIC_BASE_URL") or storage_endpoint_url()


def cors_allow_origins() -> list[str]:
    raw = env_str("CORS_ALLOW_ORIGINS")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
