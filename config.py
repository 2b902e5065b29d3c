import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_IN = int(data.get("ACCESS_TOKEN_EXPIRES_IN", 15 * 60))
    REFRESH_TOKEN_EXPIRES_IN = int(data.get("REFRESH_TOKEN_EXPIRES_IN", 30 * 24 * 60 * 60))
    REFRESH_COOKIE_SECURE = bool(data.get("REFRESH_COOKIE_SECURE", True))
    RATE_LIMIT_MAX = int(data.get("RATE_LIMIT_MAX", 5))
    RATE_LIMIT_WINDOW_MS = int(data.get("RATE_LIMIT_WINDOW_MS", 10_000))
    IS_USER_AUTOMATICALLY_CONFIRMED = bool(
        data.get("IS_USER_AUTOMATICALLY_CONFIRMED", False)
    )
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    CONFIRMATION_CODE_EXPIRES_IN = int(data.get("CONFIRMATION_CODE_EXPIRES_IN", 10 * 60))
    RECOVERY_CODE_EXPIRES_IN = int(data.get("RECOVERY_CODE_EXPIRES_IN", 10 * 60))
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
