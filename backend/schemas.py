from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.services.catalog_service import CompositionPage
from catalog.models import Composition


class ErrorResponse(BaseModel):
    error: str


class TrackResponse(BaseModel):
    title: str
    type: Literal["audio"]
    url: str
    markers: list[Any]


class CompositionResponse(BaseModel):
    id: int
    title: str
    tracks: list[TrackResponse]

    @classmethod
    def from_composition(cls, composition: Composition) -> "CompositionResponse":
        return cls(
            id=composition.id,
            title=composition.title,
            tracks=[
                TrackResponse(title=t.title, type="audio", url=t.url, markers=list(t.markers))
                for t in composition.tracks
            ],
        )


class PaginationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")


class CompositionListResponse(BaseModel):
    compositions: list[CompositionResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: CompositionPage) -> "CompositionListResponse":
        return cls(
            compositions=[CompositionResponse.from_composition(c) for c in page.compositions],
            pagination=PaginationResponse(
                total=page.total,
                current_page=page.current_page,
                total_pages=page.total_pages,
                has_next_page=page.has_next_page,
                has_prev_page=page.has_prev_page,
            ),
        )


class RescanResponse(BaseModel):
    message: str
    count: int


class HealthResponse(BaseModel):
    ok: bool
    compositions: int
    scans: int
    last_scanned_at: str | None = None
