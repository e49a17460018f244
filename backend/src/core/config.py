"""
Environment-driven settings for the Medical Center backend.

Values come from os.environ. Outside of pytest a .env file is loaded first
with python-dotenv, so local development needs no exported variables.
"""

import os
import pathlib
import sys
from dotenv import load_dotenv


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules or os.getenv("PYTEST_VERSION") is not None


def _load_env_file() -> None:
    """Load the first .env found next to backend/ or the repository root."""
    backend_dir = pathlib.Path(__file__).resolve().parents[2]
    for candidate in (
        backend_dir / ".env",
        backend_dir.parent / ".env",
        pathlib.Path.cwd() / ".env",
    ):
        if candidate.exists():
            load_dotenv(candidate)
            return


# Tests configure the environment themselves and must not pick up a developer's .env
if not _running_under_pytest():
    _load_env_file()


DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost/medical_center_dev")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Authentication
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_HOURS", "24"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
