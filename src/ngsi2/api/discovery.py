# ngsi2/api/discovery.py
"""
Root-level health endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    contract = getattr(request.app.state, "contract", None)
    return {
        "status": "healthy",
        "store": type(contract.store).__name__ if contract else "not configured",
    }
