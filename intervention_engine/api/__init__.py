"""API router for v1 endpoints."""

from fastapi import APIRouter

from intervention_engine.api import drafts, interventions

router = APIRouter()

# Intervention recommendation, analysis and catalog embeddings
router.include_router(interventions.router, prefix="/interventions", tags=["interventions"])

# FBA/BIP draft synthesis
router.include_router(drafts.router, prefix="/drafts", tags=["drafts"])
