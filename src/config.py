"""Configuration module for the Classroom Portal API.

This module provides centralized configuration management, including directory
paths, API server settings, session and join-code parameters, and application
defaults. All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Environment ---

APP_ENV: str = os.getenv("APP_ENV", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/classroom_portal.db"
)

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "5000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Authentication Configuration ---

# Validity window of a login session, in hours
SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", "24"))

# Number of random bytes behind a session token (hex encoded, so twice as long)
SESSION_TOKEN_BYTES: int = 32

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

MIN_PASSWORD_LENGTH: int = 6

# --- Class Configuration ---

CLASS_CODE_LENGTH: int = 6
CLASS_CODE_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

# --- Chat Configuration ---

DEFAULT_GROUP_CHAT_NAME: str = "Group Chat"
DEFAULT_MESSAGE_PAGE_SIZE: int = int(os.getenv("DEFAULT_MESSAGE_PAGE_SIZE", "50"))
MAX_MESSAGE_PAGE_SIZE: int = int(os.getenv("MAX_MESSAGE_PAGE_SIZE", "200"))

# --- Calendar Configuration ---

DEFAULT_EVENT_TIME: str = "00:00"
DEFAULT_EVENT_COLOR: str = "#3b82f6"
