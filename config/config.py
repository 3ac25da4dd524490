"""Settings shared by every environment.

Each value can be overridden through the environment (or a `.env` file,
loaded by python-dotenv at startup).
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
DEBUG = bool(int(os.getenv("DEBUG", "0")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# "json" keeps records in a local file slot, "mysql" in the database below
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", str(BASE_DIR / "instance" / "factory_store.json"))
STORE_SLOT = os.getenv("STORE_SLOT", "factory_logs")
STORE_LATENCY = {
    "fetch": float(os.getenv("STORE_LATENCY_FETCH", "0.8")),
    "upsert": float(os.getenv("STORE_LATENCY_UPSERT", "1.0")),
    "remove": float(os.getenv("STORE_LATENCY_REMOVE", "0.6")),
}

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "factory_worklog"),
}
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Lookup data; empty means the files shipped with the package
OPERATORS_FILE = os.getenv("OPERATORS_FILE", "")
PRODUCTS_FILE = os.getenv("PRODUCTS_FILE", "")

# "new_only": block `next` on validation errors only for the new record
ADVANCE_VALIDATION = os.getenv("ADVANCE_VALIDATION", "new_only")
SAVED_INDICATOR_SECONDS = float(os.getenv("SAVED_INDICATOR_SECONDS", "2"))
