import logging
from pathlib import Path
from urllib.parse import quote

from catalog.marker_reader import marker_path_for, read_markers
from catalog.models import Composition, Track
from catalog.track_naming import is_audio_file, parse_track_filename

logger = logging.getLogger(__name__)


class FolderScanner:
    def __init__(
        self,
        audio_dir: str,
        base_url: str,
        audio_extension: str = ".opus",
        marker_extension: str = ".json",
    ):
        self.audio_dir = Path(audio_dir)
        self.base_url = base_url.rstrip("/")
        self.audio_extension = audio_extension
        self.marker_extension = marker_extension

    def track_url(self, filename: str) -> str:
        return f"{self.base_url}/audio/{quote(filename)}"

    def scan(self) -> list[Composition]:
        """
        Build the composition list for the audio directory.

        Raises OSError if the directory itself cannot be listed. Problems with
        individual sidecar files only cost that track its markers.
        """
        filenames = sorted(entry.name for entry in self.audio_dir.iterdir() if entry.is_file())
        logger.info("Found %d files in %s", len(filenames), self.audio_dir)

        compositions: dict[str, Composition] = {}
        slots: dict[str, dict[int, Track]] = {}

        for filename in filenames:
            if not is_audio_file(filename, self.audio_extension):
                continue

            try:
                filename.encode("utf-8")
            except UnicodeEncodeError:
                logger.warning("Skipping %r: filename is not valid UTF-8", filename)
                continue

            key = parse_track_filename(filename, self.audio_extension)
            logger.debug(
                "Processing %s -> base title %r, track %d", filename, key.base_title, key.track_number
            )

            composition = compositions.get(key.base_title)
            if composition is None:
                composition = Composition(id=len(compositions) + 1, title=key.base_title)
                compositions[key.base_title] = composition
                slots[key.base_title] = {}

            if key.track_number < 1:
                logger.warning("Skipping %s: track numbers start at 1", filename)
                continue

            audio_path = self.audio_dir / filename
            markers = read_markers(marker_path_for(audio_path, self.marker_extension))

            track_slots = slots[key.base_title]
            if key.track_number in track_slots:
                # Last file wins for a repeated (title, track) pair.
                logger.warning(
                    "Duplicate track %d for %r, %s replaces the earlier file",
                    key.track_number,
                    key.base_title,
                    filename,
                )
            track_slots[key.track_number] = Track(url=self.track_url(filename), markers=markers)

        result: list[Composition] = []
        for title, composition in compositions.items():
            composition.tracks = [track for _, track in sorted(slots[title].items())]
            if composition.tracks:
                result.append(composition)

        result.sort(key=lambda c: c.id)
        self._log_summary(result)
        return result

    def _log_summary(self, compositions: list[Composition]) -> None:
        for composition in compositions:
            logger.debug(
                "Composition %r (id %d): %d tracks", composition.title, composition.id, len(composition.tracks)
            )
            for number, track in enumerate(composition.tracks, start=1):
                logger.debug("  track %d: %s (%d markers)", number, track.url, len(track.markers))
        logger.info("Scanned %d compositions from %s", len(compositions), self.audio_dir)
