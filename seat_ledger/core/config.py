import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./seat_ledger.db")
DB_CONNECT_MAX_RETRIES = int(os.getenv("DB_CONNECT_MAX_RETRIES", "30"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "1.5"))

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Per-event locking: "redis" works across processes, "local" only within one
LOCK_BACKEND = os.getenv("LOCK_BACKEND", "redis")
LOCK_TIMEOUT = float(os.getenv("LOCK_TIMEOUT", "10"))
LOCK_BLOCKING_TIMEOUT = float(os.getenv("LOCK_BLOCKING_TIMEOUT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_database_url():
    return DATABASE_URL


def get_redis_url():
    return REDIS_URL


def get_lock_backend():
    return LOCK_BACKEND.lower()
