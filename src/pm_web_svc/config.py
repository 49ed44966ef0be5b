import os
from dotenv import load_dotenv

load_dotenv()

SERVICE_HOST = os.getenv("SERVICE_HOST", "0.0.0.0")
SERVICE_PORT = int(os.getenv("SERVICE_PORT", 8000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Owner used for boards created without an explicit creator
DEFAULT_ADMIN_USER_ID = os.getenv("DEFAULT_ADMIN_USER_ID", "default-admin-user")

DB_AUTO_CREATE = os.getenv("DB_AUTO_CREATE", "true").lower() in ("1", "true", "yes")

# Template copied into the first personal board of a user who has none
DEFAULT_BOARD_TEMPLATE_ID = os.getenv("DEFAULT_BOARD_TEMPLATE_ID", "pmi-project-lifecycle-template")
