"""Shared constants used across the application."""

# Weekly schedule times are zero-padded 24h clock values (e.g. 16:00)
TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Revocation records keyed by owner rather than by token id
OWNER_REVOCATION_PREFIX = "owner:"

# Window used by the revocation statistics endpoint
REVOCATION_EXPIRING_SOON_HOURS = 24
