import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
JWT_EXP_DAYS = int(os.getenv("JWT_EXP_DAYS", "1"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_db"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/var/lib/office-manager/uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", "10"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REQUIRE_AUTH = bool(int(os.getenv("REQUIRE_AUTH", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
