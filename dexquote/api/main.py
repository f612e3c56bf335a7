"""FastAPI application for pool snapshots and swap quotes."""

import os

import uvicorn
from fastapi import FastAPI

from dexquote import __version__
from dexquote.api.endpoints import router
from dexquote.logging_config import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DEXQUOTE_HOST", "127.0.0.1")
PORT = int(os.environ.get("DEXQUOTE_PORT", "8000"))
DEBUG = os.environ.get("DEXQUOTE_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="dexquote",
    description="Read-only pool snapshots and slippage-bounded swap quotes for Uniswap-style pools",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - DEXQUOTE_HOST: Host to bind to (default: 127.0.0.1)
    - DEXQUOTE_PORT: Port to bind to (default: 8000)
    - DEXQUOTE_DEBUG: Enable debug logging and reload mode (default: false)
    """
    configure_logging(verbose=DEBUG)
    uvicorn.run(
        "dexquote.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
