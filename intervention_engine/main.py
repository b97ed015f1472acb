"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from intervention_engine.api import router as api_router
from intervention_engine.core.config import get_settings

app = FastAPI(
    title="Intervention Engine",
    description="Behavior intervention recommendation and FBA/BIP draft synthesis service",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(
        content={"status": "ok", "engine": get_settings().ENGINE_VERSION},
        status_code=200,
    )


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
