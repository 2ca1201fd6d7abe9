"""FastAPI web server for AutoMixify."""
from urllib.parse import urlencode

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from automixify import auth
from automixify.analysis import parse_playlist_id
from automixify.config import Settings
from automixify.models import SequenceResult
from automixify.sequencer import SequencingError, sequence_tracks
from automixify.spotify_service import SpotifyService

app = FastAPI(title="AutoMixify")

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request/Response models
class AnalyzeRequest(BaseModel):
    """Playlist to sequence, by URL or id, plus the user's access token."""
    # The web frontend posts camelCase keys.
    playlist_url: str | None = Field(default=None, validation_alias=AliasChoices("playlist_url", "playlistUrl"))
    playlist_id: str | None = Field(default=None, validation_alias=AliasChoices("playlist_id", "playlistId"))
    access_token: str | None = None

class RefreshRequest(BaseModel):
    refresh_token: str

class AudioFeatures(BaseModel):
    key: int
    mode: int
    tempo: float
    energy: float
    danceability: float

class OrderedTrackInfo(BaseModel):
    index: int
    id: str
    name: str
    artists: str
    uri: str
    audio_features: AudioFeatures | None = None

class TransitionInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")
    score: float

class AnalyzeResponse(BaseModel):
    """Suggested play order and the score of every transition in it."""
    ordered: list[OrderedTrackInfo]
    transitions: list[TransitionInfo]

def get_settings() -> Settings:
    return Settings.from_env()

def get_spotify_service(access_token: str) -> SpotifyService:
    return SpotifyService(access_token=access_token)


def _to_response(result: SequenceResult) -> AnalyzeResponse:
    ordered = []
    for entry in result.ordered:
        features = entry.features
        ordered.append(OrderedTrackInfo(
            index=entry.index,
            id=entry.track.id,
            name=entry.track.name,
            artists=entry.track.artists,
            uri=entry.track.uri,
            audio_features=AudioFeatures(
                key=features.key,
                mode=features.mode,
                tempo=features.tempo,
                energy=features.energy,
                danceability=features.danceability,
            ) if features else None,
        ))
    return AnalyzeResponse(
        ordered=ordered,
        transitions=[
            TransitionInfo(from_name=t.from_name, to_name=t.to_name, score=t.score)
            for t in result.transitions
        ],
    )


@app.get("/")
def index():
    return {"message": "AutoMixify API is running. POST a playlist to /api/analyze."}

@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}

@app.get("/login")
def login():
    """Redirect the user to Spotify's authorization page."""
    try:
        oauth = auth.build_oauth(get_settings())
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return RedirectResponse(auth.authorize_url(oauth))

@app.get("/callback")
def callback(code: str | None = None):
    """Exchange the authorization code and hand the tokens to the frontend."""
    if not code:
        raise HTTPException(status_code=400, detail="code required")
    try:
        settings = get_settings()
        token_info = auth.exchange_code(auth.build_oauth(settings), code)
    except Exception:
        raise HTTPException(status_code=500, detail="Error in callback")

    query = urlencode({
        "access_token": token_info.get("access_token", ""),
        "refresh_token": token_info.get("refresh_token", ""),
    })
    return RedirectResponse(f"{settings.frontend_url}?{query}")

@app.post("/refresh")
def refresh_token(request: RefreshRequest):
    try:
        return auth.refresh(auth.build_oauth(get_settings()), request.refresh_token)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/analyze", response_model=AnalyzeResponse, response_model_by_alias=True)
def analyze_playlist(request: AnalyzeRequest):
    """Fetch a playlist with its audio features and suggest a play order."""
    if not request.access_token:
        raise HTTPException(status_code=400, detail="access_token required")

    playlist_id = parse_playlist_id(request.playlist_url, request.playlist_id)
    if not playlist_id:
        raise HTTPException(status_code=400, detail="playlist id required")

    try:
        service = get_spotify_service(request.access_token)
        tracks = service.playlist_tracks(playlist_id)
        if not tracks:
            raise HTTPException(status_code=400, detail="no tracks found")

        features = service.audio_features(t.id for t in tracks)
        return _to_response(sequence_tracks(tracks, features))

    except SequencingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error: {str(e)}")
