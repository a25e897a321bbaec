import os
import sys

from dotenv import load_dotenv

# Load .env but don't override existing environment variables
# This allows test scripts to set DB_URL before import
load_dotenv(".env", override=False)

# Render sets RENDER in the environment; bind to all interfaces there
HOST = os.environ.get("HOST", "0.0.0.0" if "RENDER" in os.environ else "localhost")

# Parse PORT with clear error message on misconfiguration
try:
    PORT = int(os.environ.get("PORT", "3000"))
    if PORT <= 0:
        raise ValueError(f"PORT must be positive (got: {PORT})")
except ValueError as e:
    print(f"\n ERROR: Invalid PORT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Current value: {os.environ.get('PORT', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Database
DB_NAME = os.environ.get("DB_NAME", "pizza.sqlite")
DB_URL = os.environ.get("DB_URL", f"sqlite+aiosqlite:///{DB_NAME}")

# Order history
ORDER_PAGE_SIZE = 20
PIZZA_IMAGE_PATH = "/pizzas/{pizza_type_id}.webp"

# Keepalive Configuration
# Pinging our own health endpoint keeps free-tier hosts from idling the service
KEEPALIVE_URL = os.environ.get("KEEPALIVE_URL", "")
try:
    KEEPALIVE_INTERVAL_MINUTES = int(os.environ.get("KEEPALIVE_INTERVAL_MINUTES", "10"))
    if KEEPALIVE_INTERVAL_MINUTES <= 0:
        raise ValueError(f"KEEPALIVE_INTERVAL_MINUTES must be positive (got: {KEEPALIVE_INTERVAL_MINUTES})")
except ValueError as e:
    print(f"\n ERROR: Invalid KEEPALIVE_INTERVAL_MINUTES configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected: Positive integer (e.g., 5, 10, 14)", file=sys.stderr)
    print(f"Current value: {os.environ.get('KEEPALIVE_INTERVAL_MINUTES', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)
KEEPALIVE_TIMEOUT_SECONDS = 10

# Data Retention Configuration
DATA_RETENTION_DAYS = int(os.environ.get("DATA_RETENTION_DAYS", "30"))

# CORS: comma-separated list of origins, "*" allows any origin
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask contact details in logs
LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "7"))
