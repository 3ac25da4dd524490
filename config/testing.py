import os
import tempfile

from .config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORE_BACKEND = "json"
STORE_PATH = os.getenv("STORE_PATH", os.path.join(tempfile.gettempdir(), "factory_worklog_test.json"))
STORE_LATENCY = {"fetch": 0.0, "upsert": 0.0, "remove": 0.0}

AUTO_INIT_DB = False
