"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("BIRDSEYE_DB_PATH", PROJECT_ROOT / "data" / "db" / "birdseye.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# GRID CONFIGURATION
# =============================================================================

# Cell dimensions (in pixels)
CELL_WIDTH_PX = 128
CELL_HEIGHT_PX = 100
CELL_GAP_PX = 0  # No gap between month cells

# Combined width for positioning calculations (cell + gap)
CELL_TOTAL_WIDTH_PX = CELL_WIDTH_PX + CELL_GAP_PX

MONTHS_PER_YEAR = 12
YEAR_LABEL_WIDTH_PX = 64

# =============================================================================
# LANE CONFIGURATION
# =============================================================================

LANE_HEIGHT_PX = 120  # Band height, divided by the lane count of each cluster
LANE_TOP_OFFSET_PX = 4  # Top padding before first lane
MAX_LANES = int(os.environ.get("BIRDSEYE_MAX_LANES", "6"))

GEOMETRY_UNITS = {"px", "percent"}
DEFAULT_UNITS = os.environ.get("BIRDSEYE_UNITS", "px")

# =============================================================================
# GRID RANGE LIMITS (API)
# =============================================================================

MIN_YEAR = 1
MAX_YEAR = 9999
MAX_YEAR_SPAN = 200  # Years per /v1/layout/range or /v1/grid request

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# =============================================================================
# API CONFIGURATION
# =============================================================================

BIRDSEYE_API_KEY = os.environ.get("BIRDSEYE_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_EVENTS_PER_REQUEST = int(os.environ.get("MAX_EVENTS_PER_REQUEST", "5000"))
API_VERSION = "1.0.0"
