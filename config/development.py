import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

STORAGE_CONFIG = {
    "backend": os.getenv("STORAGE_BACKEND", "file"),
    "directory": os.getenv("STORAGE_DIR", "instance"),
    "key": os.getenv("STORE_KEY", "physiotrack_db"),
    # If enabled, a version mismatch stops startup instead of reseeding demo data
    "strict_schema": bool(int(os.getenv("STRICT_SCHEMA", "0"))),
}

GEMINI_CONFIG = {
    "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
    "model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
