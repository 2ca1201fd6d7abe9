import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from automixify.config import (
    DEFAULT_FRONTEND_URL,
    Settings,
    env_int,
    load_local_env_file,
    require_spotify_credentials,
)


class ConfigTests(unittest.TestCase):
    def test_load_local_env_file_loads_missing_values_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env_path = Path(tmpdir) / ".env"
            env_path.write_text(
                """
# comment
SPOTIPY_CLIENT_ID=test-id
SPOTIPY_CLIENT_SECRET="test-secret"
KEEP_ME=from_file
                """.strip(),
                encoding="utf-8",
            )

            with patch.dict("os.environ", {"KEEP_ME": "existing"}):
                os.environ.pop("SPOTIPY_CLIENT_ID", None)
                os.environ.pop("SPOTIPY_CLIENT_SECRET", None)
                load_local_env_file(str(env_path))
                self.assertEqual(os.environ.get("SPOTIPY_CLIENT_ID"), "test-id")
                self.assertEqual(os.environ.get("SPOTIPY_CLIENT_SECRET"), "test-secret")
                self.assertEqual(os.environ.get("KEEP_ME"), "existing")

    def test_missing_env_file_is_ignored(self) -> None:
        load_local_env_file("/nonexistent/path/.env")

    def test_env_int_uses_fallback_for_empty_and_invalid(self) -> None:
        with patch.dict("os.environ", {"PORT": ""}):
            self.assertEqual(env_int("PORT", 8888), 8888)
        with patch.dict("os.environ", {"PORT": "not-a-number"}):
            self.assertEqual(env_int("PORT", 8888), 8888)
        with patch.dict("os.environ", {"PORT": "9000"}):
            self.assertEqual(env_int("PORT", 8888), 9000)


class SettingsTests(unittest.TestCase):
    def test_from_env_reads_values_and_defaults(self) -> None:
        env = {"SPOTIPY_CLIENT_ID": "id", "SPOTIPY_CLIENT_SECRET": "secret", "PORT": "9001"}
        with patch.dict("os.environ", env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.client_id, "id")
        self.assertEqual(settings.client_secret, "secret")
        self.assertEqual(settings.port, 9001)
        self.assertEqual(settings.frontend_url, DEFAULT_FRONTEND_URL)
        self.assertTrue(settings.redirect_uri.endswith("/callback"))

    def test_from_env_reports_missing_credentials(self) -> None:
        with patch.dict("os.environ", {"SPOTIPY_CLIENT_ID": "id"}, clear=True):
            with self.assertRaises(ValueError) as exc:
                Settings.from_env()
        self.assertIn("SPOTIPY_CLIENT_SECRET", str(exc.exception))
        self.assertNotIn("SPOTIPY_CLIENT_ID,", str(exc.exception))

    def test_require_spotify_credentials_lists_all_missing(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError) as exc:
                require_spotify_credentials()
        self.assertIn("SPOTIPY_CLIENT_ID, SPOTIPY_CLIENT_SECRET", str(exc.exception))

        with patch.dict("os.environ", {"SPOTIPY_CLIENT_ID": "id", "SPOTIPY_CLIENT_SECRET": "secret"}, clear=True):
            require_spotify_credentials()


if __name__ == "__main__":
    unittest.main()
