from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 8888
DEFAULT_REDIRECT_URI = f"http://127.0.0.1:{DEFAULT_PORT}/callback"
DEFAULT_FRONTEND_URL = "https://automixify.vercel.app"


def load_local_env_file(env_path: str = ".env") -> None:
    """Load key=value pairs from a local .env file into process env.

    Existing environment variables are preserved and not overwritten.
    """

    path = Path(env_path)
    if not path.exists():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")

        if key and key not in os.environ:
            os.environ[key] = value


def env_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


CREDENTIAL_ENV_VARS = ("SPOTIPY_CLIENT_ID", "SPOTIPY_CLIENT_SECRET")


def require_spotify_credentials() -> None:
    missing = [name for name in CREDENTIAL_ENV_VARS if not os.getenv(name)]
    if missing:
        missing_list = ", ".join(missing)
        raise ValueError(
            f"Missing Spotify credentials: {missing_list}. "
            "Set them in environment variables or local .env file."
        )


@dataclass(slots=True)
class Settings:
    client_id: str
    client_secret: str
    redirect_uri: str = DEFAULT_REDIRECT_URI
    frontend_url: str = DEFAULT_FRONTEND_URL
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> Settings:
        require_spotify_credentials()
        return cls(
            client_id=os.environ["SPOTIPY_CLIENT_ID"],
            client_secret=os.environ["SPOTIPY_CLIENT_SECRET"],
            redirect_uri=os.getenv("SPOTIPY_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
            frontend_url=os.getenv("FRONTEND_URL") or DEFAULT_FRONTEND_URL,
            port=env_int("PORT", DEFAULT_PORT),
        )
