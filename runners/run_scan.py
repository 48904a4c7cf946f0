from dataclasses import asdict
from pathlib import Path
import argparse
import json
import logging
import sys

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

load_dotenv(ROOT_DIR / ".env")

from backend import config
from catalog.folder_scanner import FolderScanner


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scan an audio folder and print its compositions")
    parser.add_argument("--audio-dir", default=config.AUDIO_DIR, help="Folder containing audio and marker files")
    parser.add_argument("--base-url", default=config.PUBLIC_BASE_URL, help="Base URL used for track links")
    parser.add_argument("--verbose", action="store_true", help="Log every processed file")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    scanner = FolderScanner(
        audio_dir=args.audio_dir,
        base_url=args.base_url,
        audio_extension=config.AUDIO_EXTENSION,
        marker_extension=config.MARKER_EXTENSION,
    )

    try:
        compositions = scanner.scan()
    except OSError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 2

    print(json.dumps([asdict(c) for c in compositions], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
