"""Point settings at an in-memory SQLite store and a cheap bcrypt cost before the package is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ.setdefault("LOG_LEVEL", "WARNING")
