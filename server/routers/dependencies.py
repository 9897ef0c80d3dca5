# =============================================================================
# routers/dependencies.py
# =============================================================================

from typing import Optional

from fastapi import Depends, Header, HTTPException

from services.conversation import OrchestratorRegistry, TranslationOrchestrator
from services.session.manager import SessionService

_registry: Optional[OrchestratorRegistry] = None

def get_registry() -> OrchestratorRegistry:
    """Process-wide registry of live session views"""
    global _registry
    if _registry is None:
        _registry = OrchestratorRegistry()
    return _registry

def get_session_service(registry: OrchestratorRegistry = Depends(get_registry)) -> SessionService:
    return registry.session_service

def get_clinician_id(x_clinician_id: Optional[str] = Header(default=None)) -> str:
    """Clinician identity supplied by the upstream auth layer"""
    if not x_clinician_id:
        raise HTTPException(status_code=401, detail="Missing X-Clinician-Id header")
    return x_clinician_id

async def get_live_view(
    session_id: str,
    registry: OrchestratorRegistry = Depends(get_registry)
) -> TranslationOrchestrator:
    """Orchestrator for a session, opening it from storage if needed"""
    orchestrator = registry.get(session_id)
    if orchestrator is None:
        session = await registry.session_service.get_session(session_id)
        orchestrator = registry.open(session)
    return orchestrator
