import os
import secrets
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/leagues.db")

# Security
SECRET_KEY = os.getenv("SECRET_KEY", secrets.token_hex(32))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "leaguehub_session")
SESSION_EXPIRE_DAYS = int(os.getenv("SESSION_EXPIRE_DAYS", "30"))

# Image hosting
MEDIA_DIR = Path(os.getenv("MEDIA_DIR", str(BASE_DIR / "media")))
IMAGE_HOST_URL = os.getenv("IMAGE_HOST_URL", "http://localhost:8000/media")
ALLOWED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}

# Cover pictures are always delivered as a square, cropped around faces
COVER_PICTURE_SIZE = int(os.getenv("COVER_PICTURE_SIZE", "500"))
COVER_PICTURE_GRAVITY = "faces"
COVER_PICTURE_CROP = "fill"

# Points seeded for a league are kept after the league is deleted unless enabled
DELETE_POINTS_WITH_LEAGUE = os.getenv("DELETE_POINTS_WITH_LEAGUE", "false").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
