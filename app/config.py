# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_TOKEN = os.getenv("API_TOKEN", None)

# Data provider: "http" (REST backend) or "mock" (in-memory sample data)
_DATA_PROVIDER = os.getenv("DATA_PROVIDER", "http").lower()

# Map Geographic Settings (defaults: Orange County, CA)
_MAP_CENTER_LAT = float(os.getenv("MAP_CENTER_LAT", "33.7175"))
_MAP_CENTER_LNG = float(os.getenv("MAP_CENTER_LNG", "-117.8311"))
_MAP_BROWSE_ZOOM = int(os.getenv("MAP_BROWSE_ZOOM", "12"))
_MAP_DRILL_DOWN_ZOOM = int(os.getenv("MAP_DRILL_DOWN_ZOOM", "15"))
_MAP_USER_LOCATION_ZOOM = int(os.getenv("MAP_USER_LOCATION_ZOOM", "12"))
_MAP_MIN_ZOOM = int(os.getenv("MAP_MIN_ZOOM", "1"))
_MAP_MAX_ZOOM = int(os.getenv("MAP_MAX_ZOOM", "20"))

# Discovery list settings
_NEARBY_LIMIT = int(os.getenv("NEARBY_LIMIT", "10"))

# Optional fixed device position (used by the static geolocation provider)
_DEVICE_LAT = os.getenv("DEVICE_LAT", None)
_DEVICE_LNG = os.getenv("DEVICE_LNG", None)


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "AdSpace Discovery"
    VERSION: str = "1.0.0"

    # Data Provider
    DATA_PROVIDER: str = _DATA_PROVIDER

    # HTTP API Backend Settings
    API_BASE_URL: str = _API_BASE_URL
    API_TIMEOUT: int = _API_TIMEOUT
    API_TOKEN: str = _API_TOKEN

    # Map Geographic Configuration
    MAP_CENTER_LAT: float = _MAP_CENTER_LAT
    MAP_CENTER_LNG: float = _MAP_CENTER_LNG
    MAP_BROWSE_ZOOM: int = _MAP_BROWSE_ZOOM
    MAP_DRILL_DOWN_ZOOM: int = _MAP_DRILL_DOWN_ZOOM
    MAP_USER_LOCATION_ZOOM: int = _MAP_USER_LOCATION_ZOOM
    MAP_MIN_ZOOM: int = _MAP_MIN_ZOOM
    MAP_MAX_ZOOM: int = _MAP_MAX_ZOOM

    # Discovery list
    NEARBY_LIMIT: int = _NEARBY_LIMIT

    # Device position (static geolocation)
    DEVICE_LAT: str = _DEVICE_LAT
    DEVICE_LNG: str = _DEVICE_LNG

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "app.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
