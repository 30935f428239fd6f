from __future__ import annotations
from pathlib import Path
import os

from dotenv import load_dotenv

APP_DIR = Path(__file__).parent
DATA_DIR = APP_DIR / "data"

# Load .env early; real environment wins
load_dotenv(dotenv_path=APP_DIR / ".env", override=False)

STORE_NAME = os.getenv("STORE_NAME", "ZAR")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

CATALOG_PATH = Path(os.getenv("CATALOG_PATH", str(DATA_DIR / "catalog.json")))
CATALOG_URL = os.getenv("CATALOG_URL", "")
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "5"))

# Prior chat turns forwarded to the model
HISTORY_TURNS = int(os.getenv("HISTORY_TURNS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
