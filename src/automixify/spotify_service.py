from __future__ import annotations

import logging
import warnings
from typing import Iterable

import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials
from requests.exceptions import HTTPError

from automixify.analysis import build_feature_vector, build_track
from automixify.config import require_spotify_credentials
from automixify.models import FeatureVector, Track

logger = logging.getLogger(__name__)


def _http_status(exc: HTTPError | SpotifyException) -> int | None:
    if isinstance(exc, HTTPError):
        return exc.response.status_code if exc.response is not None else None
    return exc.http_status


class SpotifyService:
    # Both the playlist-items and audio-features endpoints cap a single
    # request at 100 entries.
    PLAYLIST_PAGE_LIMIT = 100
    FEATURES_BATCH_LIMIT = 100

    def __init__(self, access_token: str | None = None) -> None:
        if access_token:
            self.client = spotipy.Spotify(auth=access_token)
        else:
            require_spotify_credentials()
            self.client = spotipy.Spotify(auth_manager=SpotifyClientCredentials())

    def playlist_tracks(self, playlist_id: str) -> list[Track]:
        """Return every usable track of a playlist, deduplicated by id."""
        tracks: list[Track] = []
        seen: set[str] = set()

        page = self.client.playlist_items(
            playlist_id, limit=self.PLAYLIST_PAGE_LIMIT, additional_types=("track",)
        )
        while page:
            for item in page.get("items") or []:
                track = build_track((item or {}).get("track"))
                if track is None or track.id in seen:
                    continue
                seen.add(track.id)
                tracks.append(track)
            page = self.client.next(page) if page.get("next") else None

        logger.info("Fetched %d track(s) from playlist %s", len(tracks), playlist_id)
        return tracks

    def audio_features(self, track_ids: Iterable[str]) -> dict[str, FeatureVector]:
        ids = list(track_ids)
        features: dict[str, FeatureVector] = {}
        for start in range(0, len(ids), self.FEATURES_BATCH_LIMIT):
            batch = ids[start:start + self.FEATURES_BATCH_LIMIT]
            try:
                results = self.client.audio_features(batch) or []
            except (HTTPError, SpotifyException) as exc:
                if _http_status(exc) == 403:
                    warnings.warn(
                        "Spotify audio-features endpoint returned 403 Forbidden. "
                        "This endpoint may be restricted for your app credentials. "
                        "Continuing with the features collected so far.",
                        RuntimeWarning,
                        stacklevel=2,
                    )
                    break
                raise
            for raw in results:
                vector = build_feature_vector(raw)
                if vector is not None and raw.get("id"):
                    features[raw["id"]] = vector

        missing = len(ids) - len(features)
        if missing:
            logger.info("No audio features for %d of %d track(s)", missing, len(ids))
        return features
