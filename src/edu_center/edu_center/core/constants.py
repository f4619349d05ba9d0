"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DEFAULT_TOKEN_EXPIRE_MINUTES = 60 * 24
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_POOL_SIZE = 5
MIN_PASSWORD_LENGTH = 6
STUDENT_IMPORT_COLUMNS = ("name", "dob", "email", "phone_number")
