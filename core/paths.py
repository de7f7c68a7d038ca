import sys
from pathlib import Path

# Base directory (works in dev + PyInstaller)
if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).resolve().parent.parent

# Runtime data lives relative to the working directory
DATA_DIR = Path("Data")
LOGS_DIR = DATA_DIR / "Logs"
APP_ASSETS_DIR = BASE_DIR / "app" / "assets"
