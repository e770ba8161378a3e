"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths to the survey data files scattered
   throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (GeoJSON files, evidence imagery) when the app is frozen.
3. Map constants: Default viewport, detail zoom and polygon styles live here so
   the model and the map widget agree on them.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DATA_PATH (str): Absolute path to the bundled survey data.
    DEFAULT_TERRITORIES_PATH, DEFAULT_ALERTS_PATH, DEFAULT_EVIDENCE_PATH (str)
"""
import logging
import sys
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/guardiao/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DATA_PATH: str = os.path.join(ASSETS_PATH, "data")

DEFAULT_TERRITORIES_PATH: str = os.path.join(DATA_PATH, "territories.geojson")
DEFAULT_ALERTS_PATH: str = os.path.join(DATA_PATH, "maro_alerts.geojson")
DEFAULT_EVIDENCE_PATH: str = os.path.join(DATA_PATH, "evidence.json")

# QSettings keys that override the bundled sources (path or http(s) URL)
SETTINGS_TERRITORIES_KEY: str = "data/territories"
SETTINGS_ALERTS_KEY: str = "data/alerts"
SETTINGS_EVIDENCE_KEY: str = "data/evidence"
# Optional log file path
SETTINGS_LOG_FILE_KEY: str = "logging/file"

# Map viewport: (lat, lng) of the lower Tapajós region, continental zoom
DEFAULT_CENTER: tuple[float, float] = (-4.5, -54.5)
DEFAULT_ZOOM: int = 5
# Zoom used whenever a selection recenters the map (not fitted to the envelope)
TERRITORY_ZOOM: int = 10

# Polygon styles: stroke color, stroke width
TERRITORY_STROKE: tuple[str, float] = ("#ac6eee", 2.0)
ALERT_STROKE: tuple[str, float] = ("#FF0000", 2.0)

SLIDER_INITIAL_POSITION: float = 0.5

HTTP_TIMEOUT_SECONDS: float = 30.0

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
