"""
Test settings for GatekeeperService.
"""

import os

from .base import *  # noqa: F403, F401
from .base import database_from_env

DEBUG = False

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
if os.environ.get("DATABASE_URL", "").startswith("postgres"):
    DATABASES = {"default": database_from_env()}
    DATABASES["default"]["TEST"] = {"NAME": DATABASES["default"]["NAME"] + "_test"}
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# Apps ship no migrations; tables are created from the models
MIGRATION_MODULES = {}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "password"

# Never reach the network time API from tests
TIME_API_URL = ""

# Disable logging during tests
LOGGING_CONFIG = None
