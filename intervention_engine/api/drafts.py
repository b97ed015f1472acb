"""API endpoints for FBA/BIP draft synthesis."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException

from intervention_engine.api.errors import to_http_exception
from intervention_engine.core.exceptions import InvalidPayload
from intervention_engine.core.logging import get_logger
from intervention_engine.services.drafts import synthesize_draft_response

logger = get_logger(__name__)

router = APIRouter()


@router.post("/fba-bip")
async def generate_fba_bip_draft(payload: Any = Body(default=None)) -> dict[str, Any]:
    """
    Synthesize an FBA/BIP draft from aggregated data, insights and a partial plan.

    The body is ``{dataset | datasetId, insights, plan, mode?, teacherNote?, _meta?}``
    and is validated by the draft service rather than by a request model, so
    malformed input is reported per field group.

    Raises:
        HTTPException 400: If dataset, insights or plan is missing or malformed
        HTTPException 500: If synthesis fails
    """
    try:
        return synthesize_draft_response(payload)
    except InvalidPayload as e:
        logger.warning(f"Draft payload rejected: {e}")
        raise to_http_exception(e) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Draft synthesis failed")
        raise to_http_exception(e) from e
