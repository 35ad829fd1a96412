"""Constants for the PrusaLink CLI."""

ENV_PREFIX = "PRUSALINK_"
CONFIG_FILENAME = "config.json"

# Keys that may be persisted to config.json. The API key is deliberately absent.
PERSISTED_KEYS = ("address", "port", "refresh_ttl", "timeout", "strict_status", "output_format")
