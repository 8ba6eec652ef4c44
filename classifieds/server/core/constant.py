"""Application-wide constants for the HTTP layer."""

PROJECT_NAME = "Classifieds Marketplace"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

# Roles stored on seller profiles.
ROLE_USER = "user"
ROLE_ADMIN = "admin"
