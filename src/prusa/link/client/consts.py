"""Constants used across the PrusaLink client.

How to use the most important parts:
- Import this module to reference default ports, endpoints and timeouts without
  hardcoding them in your application logic.
"""

APP_NAME = "prusa-link"
APP_AUTHOR = "Prusa"

# Connection Defaults
DEFAULT_PORT = 80
DEFAULT_TIMEOUT = 10.0
DEFAULT_REFRESH_TTL = 5.0

# Authentication
API_KEY_HEADER = "X-Api-Key"

# Endpoints
PRINTER_ENDPOINT = "/api/printer"
VERSION_ENDPOINT = "/api/version"
