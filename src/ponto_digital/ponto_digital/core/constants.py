"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6371000.0

DEFAULT_EXPECTED_DAILY_MINUTES = 480
DEFAULT_TIMEZONE = "America/Sao_Paulo"

UNKNOWN_USER_NAME = "Desconhecido"
IMPORTED_DEVICE_ID = "imported"

CSV_DELIMITER = ";"
CSV_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"
