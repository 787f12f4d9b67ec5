"""
Health Router
=============
Liveness and readiness probes.

``/ready`` reports the shared execution context and the state of its
most recent request.
"""
from fastapi import APIRouter, Depends

from splitbox import __version__
from splitbox.core.host import ExecutionHost
from splitbox.web_api.routers.split import get_host

router = APIRouter()


@router.get("/health")
async def health_check():
    """Process is up."""
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check(host: ExecutionHost = Depends(get_host)):
    """
    Ready to accept split requests.

    - **execution**: ``process`` or ``thread``
    - **lastRequest**: state of the most recent request (``idle`` before any)
    """
    return {
        "status": "ready",
        "execution": "process" if host.isolated else "thread",
        "lastRequest": host.state.value,
    }
