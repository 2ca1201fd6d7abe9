from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Track:
    id: str
    name: str
    artists: str
    uri: str


@dataclass(frozen=True, slots=True)
class FeatureVector:
    key: int
    mode: int
    tempo: float
    energy: float
    danceability: float


@dataclass(slots=True)
class OrderedTrack:
    index: int
    track: Track
    features: FeatureVector | None = None


@dataclass(slots=True)
class Transition:
    from_name: str
    to_name: str
    score: float


@dataclass(slots=True)
class SequenceResult:
    ordered: list[OrderedTrack] = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)
