"""FastAPI application exposing read-only QuantumSwap state.

The surface is what monitoring collaborators consume: factory configuration,
the pair list, per-pair snapshots and path quotes. Nothing here mutates state.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quantumswap import __version__
from quantumswap.api.endpoints import router
from quantumswap.errors import QuantumSwapError
from quantumswap.log import configure_logging

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("QUANTUMSWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("QUANTUMSWAP_PORT", "8000"))
DEBUG = os.environ.get("QUANTUMSWAP_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="QuantumSwap",
    description="Read-only views over a constant-product AMM",
    version=__version__,
)


@app.exception_handler(QuantumSwapError)
async def protocol_error_handler(request: Request, exc: QuantumSwapError) -> JSONResponse:
    """Report rejected protocol calls as 400 with their stable code."""
    logger.info("request_rejected", path=request.url.path, code=exc.code, reason=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc), "code": exc.code})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - QUANTUMSWAP_HOST: Host to bind to (default: 0.0.0.0)
    - QUANTUMSWAP_PORT: Port to bind to (default: 8000)
    - QUANTUMSWAP_DEBUG: Enable debug/reload mode (default: false)
    - QUANTUMSWAP_LOG_LEVEL: Log level (default: INFO)
    """
    configure_logging()
    uvicorn.run(
        "quantumswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
