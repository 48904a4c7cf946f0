import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def marker_path_for(audio_path: Path, marker_extension: str) -> Path:
    return audio_path.with_suffix(marker_extension)


def read_markers(path: Path) -> list[Any]:
    if not path.is_file():
        logger.debug("No marker file for %s", path.name)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read marker file %s: %s", path, exc)
        return []

    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        markers = data.get("markers")
        return markers if isinstance(markers, list) else []

    logger.warning("Ignoring marker file %s: unsupported JSON shape %s", path, type(data).__name__)
    return []
