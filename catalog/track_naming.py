import re

from catalog.models import TrackKey

TRACK_SUFFIX_RE = re.compile(r"_track(\d+)$", re.ASCII)


def is_audio_file(filename: str, audio_extension: str) -> bool:
    return filename.endswith(audio_extension)


def parse_track_filename(filename: str, audio_extension: str) -> TrackKey:
    """
    Split an audio filename into its composition key.

    "song_track3.opus" -> ("song", 3), "song.opus" -> ("song", 1).
    Anything that is not a trailing `_track<digits>` stays part of the title.
    """
    stem = filename[: -len(audio_extension)] if filename.endswith(audio_extension) else filename

    match = TRACK_SUFFIX_RE.search(stem)
    if match is None:
        return TrackKey(base_title=stem, track_number=1)

    return TrackKey(base_title=stem[: match.start()], track_number=int(match.group(1)))
