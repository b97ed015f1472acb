"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException

from intervention_engine.core.exceptions import (
    EmbeddingsUnavailable,
    InvalidPayload,
    UpstreamProviderFailure,
)


def to_http_exception(error: Exception) -> HTTPException:
    """
    Map a domain exception to an HTTPException.

    InvalidPayload -> 400 (with per-group details), EmbeddingsUnavailable -> 412,
    UpstreamProviderFailure -> 502, anything else -> 500.
    """
    if isinstance(error, InvalidPayload):
        return HTTPException(
            status_code=400,
            detail={"message": str(error), "errors": error.errors},
        )
    if isinstance(error, EmbeddingsUnavailable):
        return HTTPException(status_code=412, detail=str(error))
    if isinstance(error, UpstreamProviderFailure):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail="Internal server error")
