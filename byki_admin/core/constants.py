"""Application constants shared across layers."""

# Product images
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "image/gif"})

# Uppercase alphanumeric, 4-20 characters
VOUCHER_CODE_PATTERN = r"^[A-Z0-9]{4,20}$"

# Persistent alert raised when a new emergency comes in
EMERGENCY_ALERT_MESSAGE = "NEW EMERGENCY!"
EMERGENCY_ALERT_DESCRIPTION = "A user has requested emergency assistance."

# Page name the UI state starts on
DEFAULT_PAGE = "dashboard"
