import os
import tempfile

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_EXP_DAYS = 1

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_test_db"),
}
DB_POOL_SIZE = 2

UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), "office-manager-test-uploads")
MAX_UPLOAD_BYTES = 50 * 1024 * 1024

# Lowest cost bcrypt accepts; keeps the suite fast.
BCRYPT_LOG_ROUNDS = 4

CORS_ORIGINS = "*"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REQUIRE_AUTH = False

AUTO_INIT_DB = False
