"""Global settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Directories
DATA_DIR = PROJECT_ROOT / "data"
LAYOUT_PROFILES_DIR = DATA_DIR / "layout_profiles"
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", PROJECT_ROOT / "output"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

# Processing settings
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "50"))

# Row clustering tolerance, in layout units (PDF points for pdfplumber input)
Y_THRESHOLD = float(os.getenv("Y_THRESHOLD", "5"))

# Column alignment tolerance for continuation rows
X_THRESHOLD = float(os.getenv("X_THRESHOLD", "10"))

# Cap rates at or above this value are treated as unrelated numerals
CAP_RATE_MAX = float(os.getenv("CAP_RATE_MAX", "10"))

# Primary rows with fewer fragments than this are header/noise
MIN_PRIMARY_FRAGMENTS = int(os.getenv("MIN_PRIMARY_FRAGMENTS", "5"))

# pdfplumber word merging tolerance (keeps "640 Columbia Street" as one fragment)
PDF_X_TOLERANCE = float(os.getenv("PDF_X_TOLERANCE", "3"))
PDF_Y_TOLERANCE = float(os.getenv("PDF_Y_TOLERANCE", "3"))

# Layout profile used when none is requested
DEFAULT_LAYOUT_PROFILE = os.getenv("LAYOUT_PROFILE", "default")

# Output settings
EXPORT_FORMAT = os.getenv("EXPORT_FORMAT", "xlsx")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = LOGS_DIR / "extractor.log"

# Supported input types, in the order they are tried
SUPPORTED_SUFFIXES = [
    ".pdf",     # Native PDF, fragments via pdfplumber
    ".json",    # Pre-extracted positioned text ({"pages": [{"content": [...]}]})
]
