import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
JWT_EXP_DAYS = int(os.getenv("JWT_EXP_DAYS", "1"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_db"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", str(Path.cwd() / "uploads"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", "10"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Bearer token checks; off keeps the open API the browser client expects.
REQUIRE_AUTH = bool(int(os.getenv("REQUIRE_AUTH", "0")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
