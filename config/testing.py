SECRET_KEY = "test-secret"

STORAGE_CONFIG = {
    "backend": "memory",
    "directory": "",
    "key": "physiotrack_db",
    "strict_schema": False,
}

GEMINI_CONFIG = {
    "api_key": None,
    "model": "gemini-2.5-flash",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
