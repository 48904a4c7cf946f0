from datetime import datetime, timezone
from threading import Lock
from typing import Iterable

from catalog.models import Composition


class CatalogStore:
    """
    Holds the published composition list.

    Readers get an immutable snapshot; a scan publishes its result with a
    single replace() once it has finished, so a reader never sees a partial
    list.
    """

    def __init__(self):
        self._lock = Lock()
        self._compositions: tuple[Composition, ...] = ()
        self._version = 0
        self._last_scanned_at: str | None = None

    def replace(self, compositions: Iterable[Composition]) -> None:
        published = tuple(compositions)
        with self._lock:
            self._compositions = published
            self._version += 1
            self._last_scanned_at = datetime.now(timezone.utc).isoformat()

    def snapshot(self) -> tuple[Composition, ...]:
        with self._lock:
            return self._compositions

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def last_scanned_at(self) -> str | None:
        with self._lock:
            return self._last_scanned_at
