# =============================================================================
# services/session/__init__.py
# =============================================================================

"""
Session Management Services

Handles consultation session lifecycle:
- Session creation for a clinician and patient language
- Retrieval and status updates
- Recent-session listing for the dashboard
"""

from .manager import SessionService, serialize_session

__all__ = ["SessionService", "serialize_session"]
