# ngsi2/api/dependencies.py
"""
FastAPI dependencies for request-scoped services.
"""
from __future__ import annotations

from fastapi import Request

from ngsi2.core.contract import RequestContract


def get_contract(request: Request) -> RequestContract:
    """The ``RequestContract`` wired into the application state."""
    return request.app.state.contract
