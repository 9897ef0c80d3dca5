# =============================================================================
# services/conversation/__init__.py
# =============================================================================

"""
Turn-taking conversation services for clinician/patient translation
"""

from .orchestrator import Speaker, TurnPhase, TurnState, TranslationOrchestrator
from .registry import OrchestratorRegistry

__all__ = ["Speaker", "TurnPhase", "TurnState", "TranslationOrchestrator", "OrchestratorRegistry"]
