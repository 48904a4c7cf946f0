from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TrackKey:
    base_title: str
    track_number: int


@dataclass
class Track:
    url: str
    title: str = "Audio"
    type: str = "audio"
    # Passed through exactly as read from the sidecar file.
    markers: list[Any] = field(default_factory=list)


@dataclass
class Composition:
    id: int
    title: str
    tracks: list[Track] = field(default_factory=list)
