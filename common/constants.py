"""Project-wide constants (digest widths, default ports, header names)."""

DIGEST_SIZE_BYTES: int = 32  # SHA-256 output width
SIZE_FIELD_BYTES: int = 32  # size is hashed as a 256-bit unsigned integer
LENGTH_PREFIX_BYTES: int = 8

REGISTRY_PORT: int = 8000

AUTHORIZATION_SCHEME = "Bearer"
REQUEST_ID_HEADER = "X-Request-ID"
