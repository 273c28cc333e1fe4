"""Object keys and download URLs.

Download URLs have the shape::

    <base>/v0/b/<bucket>/o/<percent-encoded key>?alt=media&token=<token>

The key is encoded with no safe characters, so it never contains a
slash inside the URL path and always ends at the query delimiter.
"""

import os
import re
from urllib.parse import quote, unquote, urlencode, urlsplit

from core.models.errors import InvalidUrlError
from core.utils.constants import (
    DOWNLOAD_URL_OBJECT_SEGMENT,
    ENV_IMAGE_DOWNLOAD_BASE_URL,
    FILE_NAME_UNSAFE_PATTERN,
    UNKNOWN_FILE_NAME,
)

_UNSAFE_CHARS = re.compile(FILE_NAME_UNSAFE_PATTERN)


def get_download_base_url() -> str:
    """Return the configured download host base URL (no trailing slash)."""
    base_url = os.getenv(ENV_IMAGE_DOWNLOAD_BASE_URL)
    if not base_url:
        raise RuntimeError(f"{ENV_IMAGE_DOWNLOAD_BASE_URL} environment variable is not set")
    return base_url.rstrip("/")


def sanitize_file_name(file_name: str) -> str:
    """Replace every character outside [A-Za-z0-9.-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", file_name)


def build_object_key(upload_path: str, file_name: str, timestamp_ms: int) -> str:
    """Build `<upload_path>/<timestamp_ms>_<sanitized file name>`."""
    return f"{upload_path}/{timestamp_ms}_{sanitize_file_name(file_name)}"


def build_download_url(
    key: str,
    token: str,
    *,
    bucket: str,
    base_url: str | None = None,
) -> str:
    """Mint the public download URL for a stored object."""
    base = base_url.rstrip("/") if base_url else get_download_base_url()
    query = urlencode({"alt": "media", "token": token})
    return f"{base}/v0/b/{quote(bucket, safe='')}/o/{quote(key, safe='')}?{query}"


def parse_object_key(url: str) -> str:
    """Extract the percent-decoded object key from a download URL.

    Raises:
        InvalidUrlError: If the URL has no `/o/<key>?` section
    """
    try:
        parts = urlsplit(url)
        has_query = "?" in url.split("#", 1)[0]
    except (AttributeError, TypeError, ValueError) as exc:
        raise InvalidUrlError(details={"url": url}) from exc

    _, separator, encoded_key = parts.path.rpartition(DOWNLOAD_URL_OBJECT_SEGMENT)

    if not parts.scheme or not parts.netloc or not separator or not encoded_key or not has_query:
        raise InvalidUrlError(details={"url": url})

    return unquote(encoded_key)


def get_file_name_from_url(url: str) -> str:
    """Return the last segment of the object key, or "unknown"."""
    try:
        key = parse_object_key(url)
    except InvalidUrlError:
        return UNKNOWN_FILE_NAME

    return key.rsplit("/", 1)[-1] or UNKNOWN_FILE_NAME


def is_storage_url(url: str) -> bool:
    """Whether the URL is served by this backend's download host."""
    expected_host = urlsplit(get_download_base_url()).hostname

    try:
        host = urlsplit(url).hostname
    except (AttributeError, TypeError, ValueError):
        return False

    return bool(host) and host == expected_host
