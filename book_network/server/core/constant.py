"""Application-wide constants."""

PROJECT_NAME = "Book Network"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"

# Channel suffix that live notifications are pushed on.
NOTIFICATION_DESTINATION = "/notifications"
