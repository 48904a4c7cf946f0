from dataclasses import dataclass
import logging
import math

from catalog.folder_scanner import FolderScanner
from catalog.models import Composition
from storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class CatalogScanError(Exception):
    pass


@dataclass
class CompositionPage:
    compositions: list[Composition]
    total: int
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class CatalogService:
    def __init__(self, store: CatalogStore, scanner: FolderScanner, default_limit: int = 5):
        self.store = store
        self.scanner = scanner
        self.default_limit = default_limit

    def list_compositions(self, page: int = 1, limit: int | None = None) -> CompositionPage:
        if limit is None:
            limit = self.default_limit
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")

        compositions = self.store.snapshot()
        start = (page - 1) * limit
        end = page * limit

        return CompositionPage(
            compositions=list(compositions[start:end]),
            total=len(compositions),
            current_page=page,
            total_pages=math.ceil(len(compositions) / limit),
            has_next_page=end < len(compositions),
            has_prev_page=page > 1,
        )

    def get_composition(self, composition_id: int) -> Composition | None:
        for composition in self.store.snapshot():
            if composition.id == composition_id:
                return composition
        return None

    def rescan(self) -> int:
        try:
            compositions = self.scanner.scan()
        except OSError as exc:
            raise CatalogScanError(f"Failed to scan {self.scanner.audio_dir}: {exc}") from exc

        self.store.replace(compositions)
        return len(compositions)

    def load_initial(self) -> int:
        try:
            count = self.rescan()
        except CatalogScanError:
            logger.exception("Initial scan failed, starting with an empty catalog")
            return 0

        logger.info("Loaded %d compositions", count)
        return count
