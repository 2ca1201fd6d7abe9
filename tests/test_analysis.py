import unittest

from automixify.analysis import build_feature_vector, build_track, parse_playlist_id
from automixify.models import FeatureVector, Track


def _fake_track(track_id: str | None = "t1") -> dict:
    return {
        "id": track_id,
        "name": "Test Song",
        "artists": [{"name": "First Artist"}, {"name": "Second Artist"}],
        "uri": f"spotify:track:{track_id}",
    }


def _fake_features(**overrides) -> dict:
    features = {
        "id": "t1",
        "key": 5,
        "mode": 0,
        "tempo": 123.4,
        "energy": 0.71,
        "danceability": 0.66,
        "valence": 0.4,
    }
    features.update(overrides)
    return features


class ParsePlaylistIdTests(unittest.TestCase):
    def test_explicit_id_wins(self) -> None:
        self.assertEqual(
            parse_playlist_id("https://open.spotify.com/playlist/fromUrl", "explicit"),
            "explicit",
        )

    def test_id_from_web_url(self) -> None:
        url = "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=abc123"
        self.assertEqual(parse_playlist_id(url), "37i9dQZF1DXcBWIGoYBM5M")

    def test_id_from_spotify_uri(self) -> None:
        self.assertEqual(parse_playlist_id("spotify:playlist:37i9dQZF1DX0XUsuxWHRQd"), "37i9dQZF1DX0XUsuxWHRQd")

    def test_none_when_nothing_matches(self) -> None:
        self.assertIsNone(parse_playlist_id("https://open.spotify.com/album/xyz"))
        self.assertIsNone(parse_playlist_id(None, None))
        self.assertIsNone(parse_playlist_id("", ""))


class BuildTrackTests(unittest.TestCase):
    def test_builds_track_with_joined_artists(self) -> None:
        track = build_track(_fake_track())
        self.assertEqual(
            track,
            Track(id="t1", name="Test Song", artists="First Artist, Second Artist", uri="spotify:track:t1"),
        )

    def test_returns_none_without_id(self) -> None:
        self.assertIsNone(build_track(_fake_track(track_id=None)))
        self.assertIsNone(build_track(None))
        self.assertIsNone(build_track({}))

    def test_missing_artists_gives_empty_string(self) -> None:
        raw = _fake_track()
        del raw["artists"]
        self.assertEqual(build_track(raw).artists, "")


class BuildFeatureVectorTests(unittest.TestCase):
    def test_builds_vector_from_features(self) -> None:
        vector = build_feature_vector(_fake_features())
        self.assertEqual(
            vector,
            FeatureVector(key=5, mode=0, tempo=123.4, energy=0.71, danceability=0.66),
        )

    def test_returns_none_for_null_entry(self) -> None:
        self.assertIsNone(build_feature_vector(None))
        self.assertIsNone(build_feature_vector({}))

    def test_returns_none_when_field_missing(self) -> None:
        features = _fake_features()
        del features["tempo"]
        self.assertIsNone(build_feature_vector(features))
        self.assertIsNone(build_feature_vector(_fake_features(energy=None)))

    def test_zero_values_are_kept(self) -> None:
        vector = build_feature_vector(_fake_features(key=0, mode=0, energy=0.0))
        self.assertEqual(vector.key, 0)
        self.assertEqual(vector.energy, 0.0)


if __name__ == "__main__":
    unittest.main()
