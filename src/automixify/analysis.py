from __future__ import annotations

import re

from automixify.models import FeatureVector, Track

_PLAYLIST_ID_PATTERN = re.compile(r"playlist[/:]([A-Za-z0-9]+)")
_FEATURE_FIELDS = ("key", "mode", "tempo", "energy", "danceability")


def parse_playlist_id(playlist_url: str | None = None, playlist_id: str | None = None) -> str | None:
    if playlist_id:
        return playlist_id
    if not playlist_url:
        return None
    match = _PLAYLIST_ID_PATTERN.search(playlist_url)
    return match.group(1) if match else None


def build_track(track: dict | None) -> Track | None:
    # Local files and removed tracks come back without an id.
    if not track or not track.get("id"):
        return None

    return Track(
        id=track["id"],
        name=track.get("name", ""),
        artists=", ".join(a.get("name", "") for a in track.get("artists", [])),
        uri=track.get("uri", ""),
    )


def build_feature_vector(features: dict | None) -> FeatureVector | None:
    if not features:
        return None
    if any(features.get(name) is None for name in _FEATURE_FIELDS):
        return None

    return FeatureVector(
        key=int(features["key"]),
        mode=int(features["mode"]),
        tempo=float(features["tempo"]),
        energy=float(features["energy"]),
        danceability=float(features["danceability"]),
    )
