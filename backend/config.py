from pathlib import Path
import os

ROOT_DIR = Path(__file__).resolve().parents[1]

AUDIO_DIR = os.getenv("AUDIO_DIR", str(ROOT_DIR / "audio"))
AUDIO_EXTENSION = os.getenv("AUDIO_EXTENSION", ".opus")
MARKER_EXTENSION = os.getenv("MARKER_EXTENSION", ".json")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "7779"))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", f"http://localhost:{PORT}")

DEFAULT_PAGE_LIMIT = 5

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
