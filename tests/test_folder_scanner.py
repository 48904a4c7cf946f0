import json
import os
import tempfile
import unittest
from pathlib import Path
import sys

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from catalog.folder_scanner import FolderScanner

BASE_URL = "http://localhost:7779"


def touch(folder: str, name: str, content: str = "") -> None:
    with open(os.path.join(folder, name), "w", encoding="utf-8") as f:
        f.write(content)


class TestFolderScanner(unittest.TestCase):
    def _scan(self, tmp: str):
        return FolderScanner(audio_dir=tmp, base_url=BASE_URL).scan()

    def test_each_plain_file_is_its_own_composition(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            for name in ("alpha.opus", "beta.opus", "gamma.opus"):
                touch(tmp, name)

            compositions = self._scan(tmp)

            self.assertEqual([c.title for c in compositions], ["alpha", "beta", "gamma"])
            self.assertEqual([c.id for c in compositions], [1, 2, 3])
            for c in compositions:
                self.assertEqual(len(c.tracks), 1)
                self.assertEqual(c.tracks[0].url, f"{BASE_URL}/audio/{c.title}.opus")
                self.assertEqual(c.tracks[0].title, "Audio")
                self.assertEqual(c.tracks[0].type, "audio")
                self.assertEqual(c.tracks[0].markers, [])

    def test_tracks_are_grouped_in_track_number_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "piece_track3.opus")
            touch(tmp, "piece_track1.opus")
            touch(tmp, "piece_track2.opus")

            compositions = self._scan(tmp)

            self.assertEqual(len(compositions), 1)
            urls = [t.url for t in compositions[0].tracks]
            self.assertEqual(
                urls,
                [f"{BASE_URL}/audio/piece_track{n}.opus" for n in (1, 2, 3)],
            )

    def test_gap_slots_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "lonely_track2.opus")

            compositions = self._scan(tmp)

            self.assertEqual(len(compositions), 1)
            self.assertEqual(len(compositions[0].tracks), 1)
            self.assertIsNotNone(compositions[0].tracks[0])

    def test_plain_file_and_track_suffix_share_a_composition(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "duo.opus")
            touch(tmp, "duo_track2.opus")

            compositions = self._scan(tmp)

            self.assertEqual(len(compositions), 1)
            self.assertEqual(
                [t.url for t in compositions[0].tracks],
                [f"{BASE_URL}/audio/duo.opus", f"{BASE_URL}/audio/duo_track2.opus"],
            )

    def test_duplicate_track_number_last_file_wins(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            # "dup.opus" and "dup_track1.opus" both map to track 1; sorted order processes dup.opus first.
            touch(tmp, "dup.opus")
            touch(tmp, "dup_track1.opus")

            compositions = self._scan(tmp)

            self.assertEqual(len(compositions[0].tracks), 1)
            self.assertEqual(compositions[0].tracks[0].url, f"{BASE_URL}/audio/dup_track1.opus")

    def test_markers_from_sidecar(self) -> None:
        markers = [{"start": 0.5, "end": 4, "label": "theme"}]
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "song_track1.opus")
            touch(tmp, "song_track1.json", json.dumps(markers))
            touch(tmp, "song_track2.opus")
            touch(tmp, "song_track2.json", "{broken")

            compositions = self._scan(tmp)

            self.assertEqual(compositions[0].tracks[0].markers, markers)
            self.assertEqual(compositions[0].tracks[1].markers, [])

    def test_non_audio_files_and_directories_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "notes.txt")
            touch(tmp, "orphan.json", "[]")
            os.makedirs(os.path.join(tmp, "folder.opus"))
            touch(tmp, "real.opus")

            compositions = self._scan(tmp)

            self.assertEqual([c.title for c in compositions], ["real"])

    def test_track_zero_is_skipped_and_empty_composition_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "a.opus")
            touch(tmp, "b_track0.opus")
            touch(tmp, "c.opus")

            compositions = self._scan(tmp)

            self.assertEqual([c.title for c in compositions], ["a", "c"])
            self.assertEqual([c.id for c in compositions], [1, 3])

    def test_url_quotes_filename(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "Night Song.opus")

            compositions = self._scan(tmp)

            self.assertEqual(compositions[0].tracks[0].url, f"{BASE_URL}/audio/Night%20Song.opus")

    def test_non_utf8_filename_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "good.opus")
            try:
                with open(os.path.join(os.fsencode(tmp), b"bad\xff.opus"), "wb"):
                    pass
            except OSError:
                self.skipTest("filesystem rejects non-UTF-8 names")

            with self.assertLogs("catalog.folder_scanner", level="WARNING"):
                compositions = self._scan(tmp)

            self.assertEqual([c.title for c in compositions], ["good"])
            self.assertEqual(compositions[0].tracks[0].url, f"{BASE_URL}/audio/good.opus")

    def test_large_track_number_gives_single_track(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            touch(tmp, "big_track1000000000.opus")
            touch(tmp, "big_track7.opus")

            compositions = self._scan(tmp)

            self.assertEqual(
                [t.url for t in compositions[0].tracks],
                [f"{BASE_URL}/audio/big_track7.opus", f"{BASE_URL}/audio/big_track1000000000.opus"],
            )

    def test_missing_directory_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            scanner = FolderScanner(audio_dir=os.path.join(tmp, "missing"), base_url=BASE_URL)
            with self.assertRaises(OSError):
                scanner.scan()


if __name__ == "__main__":
    unittest.main()
