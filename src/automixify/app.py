from __future__ import annotations

import argparse
import logging
import os

from automixify.analysis import parse_playlist_id
from automixify.config import load_local_env_file
from automixify.models import SequenceResult
from automixify.sequencer import SequencingError, sequence_tracks


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AutoMixify playlist sequencer")
    parser.add_argument("--playlist", required=True, help="Spotify playlist URL, URI or id")
    parser.add_argument(
        "--access-token",
        default=os.getenv("ACCESS_TOKEN"),
        help="User access token (defaults to ACCESS_TOKEN env; client credentials when unset)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def resolve_playlist_id(value: str) -> str:
    playlist_id = parse_playlist_id(playlist_url=value)
    if playlist_id:
        return playlist_id
    if value.isalnum():
        return value
    raise ValueError(
        f"Unable to read a playlist id from {value!r}. "
        "Pass a playlist URL, a spotify:playlist: URI or the bare id."
    )


def format_result(result: SequenceResult) -> list[str]:
    lines = ["Suggested order"]
    for position, entry in enumerate(result.ordered, start=1):
        features = entry.features
        detail = f"BPM: {features.tempo:.1f}, Key: {features.key}" if features else "no audio features"
        lines.append(f"{position:>3}. {entry.track.name} - {entry.track.artists} ({detail})")
    if result.transitions:
        lines.append("Transitions")
        for t in result.transitions:
            lines.append(f"  {t.from_name} -> {t.to_name}: {t.score:.2f}")
    return lines


def main(argv: list[str] | None = None) -> int:
    load_local_env_file()
    args = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    from automixify.spotify_service import SpotifyService

    playlist_id = resolve_playlist_id(args.playlist)
    service = SpotifyService(access_token=args.access_token)
    tracks = service.playlist_tracks(playlist_id)
    features = service.audio_features(t.id for t in tracks)

    try:
        result = sequence_tracks(tracks, features)
    except SequencingError as exc:
        print(str(exc))
        return 1

    for line in format_result(result):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
