# config.py
# Values come from the environment (or a local .env file)
import os
from dotenv import load_dotenv

load_dotenv()

# Database: DATABASE_URL wins over the discrete fields
DATABASE_URL = os.getenv("DATABASE_URL", "")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "5432"))
DB_NAME = os.getenv("DB_NAME", "postgres")
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")

# Connection pool bounds
POOL_MIN_CONN = int(os.getenv("POOL_MIN_CONN", "1"))
POOL_MAX_CONN = int(os.getenv("POOL_MAX_CONN", "10"))

QUERY_TIMEOUT = int(os.getenv("QUERY_TIMEOUT", "120"))   # seconds, 0 = no limit

# HTTP server
HTTP_HOST = os.getenv("HTTP_HOST", "0.0.0.0")
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# JSON-lines file receiving every statement sent to the DB; empty disables it
AUDIT_LOG = os.getenv("AUDIT_LOG", "")
