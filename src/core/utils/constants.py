"""Constants shared by the pipeline, storage layer and Lambda handlers.

Upload policy, compression defaults, error codes, user-facing messages
and environment variable names all live here.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Image Processing Errors
ERROR_CODE_IMAGE_DECODE_FAILED = "IMAGE_DECODE_FAILED"
ERROR_CODE_IMAGE_ENCODE_FAILED = "IMAGE_ENCODE_FAILED"

# Storage Errors
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_DOWNLOAD_URL_FAILED = "DOWNLOAD_URL_FAILED"
ERROR_CODE_IMAGE_DELETION_FAILED = "IMAGE_DELETION_FAILED"
ERROR_CODE_INVALID_IMAGE_URL = "INVALID_IMAGE_URL"


# ============================================================================
# User-facing Messages (French storefront)
# ============================================================================

MESSAGE_UNSUPPORTED_TYPE = "Type de fichier non supporté. Utilisez JPG, PNG ou WebP."
MESSAGE_FILE_TOO_LARGE = "Fichier trop volumineux. Maximum 5MB autorisé."
MESSAGE_DECODE_FAILED = "Impossible de charger l'image"
MESSAGE_ENCODE_FAILED = "Échec de la compression de l'image"
MESSAGE_UPLOAD_FAILED = "Échec du téléchargement de l'image"
MESSAGE_DOWNLOAD_URL_FAILED = "Impossible d'obtenir l'URL de l'image"
MESSAGE_INVALID_IMAGE_URL = "URL d'image invalide"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes


# Pillow encoder name for each accepted MIME type
PILLOW_FORMATS: Final[dict[str, str]] = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(PILLOW_FORMATS)

# Registered MIME type of each encoder's output
ENCODED_MIME_TYPES: Final[dict[str, str]] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}


# ============================================================================
# Compression Defaults
# ============================================================================

DEFAULT_MAX_WIDTH = 800
DEFAULT_QUALITY = 0.8


# ============================================================================
# Object Keys & Download URLs
# ============================================================================

FILE_NAME_UNSAFE_PATTERN = r"[^a-zA-Z0-9.-]"
UPLOAD_PATH_PATTERN = r"^[a-zA-Z0-9_-]+(/[a-zA-Z0-9_-]+)*$"
DOWNLOAD_TOKEN_METADATA_KEY = "download-token"
DOWNLOAD_URL_OBJECT_SEGMENT = "/o/"
UNKNOWN_FILE_NAME = "unknown"

# Managed transfer tuning (multipart above this size)
MULTIPART_THRESHOLD = 256 * 1024
MULTIPART_CHUNKSIZE = 5 * 1024 * 1024

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_DOWNLOAD_BASE_URL = "IMAGE_DOWNLOAD_BASE_URL"
ENV_AWS_REGION = "AWS_REGION"

METRICS_NAMESPACE = "StorefrontImages"

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
