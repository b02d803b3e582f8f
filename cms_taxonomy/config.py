# cms_taxonomy/config.py
import os

# Database
DATABASE_URL: str = os.getenv("CMS_DATABASE_URL", "sqlite:///./cms_taxonomy.db")
DB_POOL_SIZE: int = int(os.getenv("CMS_DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW: int = int(os.getenv("CMS_DB_MAX_OVERFLOW", "10"))
DB_POOL_TIMEOUT: int = int(os.getenv("CMS_DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE: int = int(os.getenv("CMS_DB_POOL_RECYCLE", "3600"))

# HTTP
API_PREFIX: str = os.getenv("CMS_API_PREFIX", "").rstrip("/")
CORS_ORIGINS: list = [
    origin.strip() for origin in os.getenv("CMS_CORS_ORIGINS", "*").split(",") if origin.strip()
]
HOST: str = os.getenv("CMS_HOST", "0.0.0.0")
PORT: int = int(os.getenv("CMS_PORT", "8000"))

# Logging
LOG_LEVEL: str = os.getenv("CMS_LOG_LEVEL", "INFO").upper()
