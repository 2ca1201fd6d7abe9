"""Entry point for running as a module."""
from automixify.api import app
from automixify.config import DEFAULT_PORT, env_int, load_local_env_file
import uvicorn

if __name__ == "__main__":
    load_local_env_file()
    port = env_int("PORT", DEFAULT_PORT)
    uvicorn.run(app, host="0.0.0.0", port=port)
