"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_UPLOAD_BYTES = 50 * 1024 * 1024
DEFAULT_BCRYPT_ROUNDS = 10
DEFAULT_POOL_SIZE = 5
DEFAULT_TOKEN_DAYS = 1

# Category filter value meaning "no filter".
ALL_CATEGORIES = "All"

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "text/plain",
        "text/csv",
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "application/zip",
        "application/x-rar-compressed",
        "application/json",
    }
)
