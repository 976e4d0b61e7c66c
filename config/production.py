import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_CONFIG = {
    "backend": os.getenv("STORAGE_BACKEND", "file"),
    "directory": os.getenv("STORAGE_DIR", "/var/lib/physiotrack"),
    "key": os.getenv("STORE_KEY", "physiotrack_db"),
    "strict_schema": bool(int(os.getenv("STRICT_SCHEMA", "1"))),
}

GEMINI_CONFIG = {
    "api_key": os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
    "model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
