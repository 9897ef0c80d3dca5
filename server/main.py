# main.py - MedBridge clinical translator API
# Page-level orchestration lives in the routers; this module wires the app

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from datetime import datetime

from core.config import settings
from core.logging_config import setup_logging
from core.exceptions import (
    MedBridgeException,
    SessionNotFoundError,
    ValidationError,
    PhraseBookBusyError,
    DatabaseError
)
from models.database import Base, engine
from routers import session_router, translation_router, phrase_router

# Configure logging
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MedBridge - Clinical Translation API",
    description="Turn-based clinician/patient translation with session tracking",
    version=settings.app_version
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.include_router(session_router.router)
app.include_router(translation_router.router)
app.include_router(phrase_router.router)

# =============================================================================
# ERROR HANDLING
# =============================================================================

def _error_body(exc: MedBridgeException) -> dict:
    return {"detail": exc.message, "error_code": exc.error_code}

@app.exception_handler(SessionNotFoundError)
async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    return JSONResponse(status_code=404, content=_error_body(exc))

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content=_error_body(exc))

@app.exception_handler(PhraseBookBusyError)
async def phrase_book_busy_handler(request: Request, exc: PhraseBookBusyError):
    return JSONResponse(status_code=409, content=_error_body(exc))

@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    logger.error(f"❌ Database error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content=_error_body(exc))

# =============================================================================
# CORE API ENDPOINTS
# =============================================================================

@app.get("/")
async def root():
    return {
        "message": "MedBridge - Clinical Translation API",
        "version": settings.app_version,
        "translation_provider": settings.translation_provider,
        "endpoints": {
            "sessions": ["/dashboard", "/languages", "/sessions", "/sessions/{session_id}"],
            "translation": [
                "/translation?sessionId=&language=",
                "/translation/{session_id}/state",
                "/translation/{session_id}/{speaker}/start",
                "/translation/{session_id}/{speaker}/finish",
                "/translation/{session_id}/{speaker}/capture",
                "/translation/{session_id}/{speaker}/release",
                "/translation/{session_id}/end"
            ],
            "phrases": ["/phrases", "/phrases/speak"],
            "health": ["/health"]
        }
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.environment,
        "services": {
            "translation": settings.translation_provider,
            "session_management": "ready",
            "speech_capture": "simulated",
            "speech_playback": "simulated"
        }
    }

# =============================================================================
# STARTUP EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    logger.info(f"🚀 {settings.app_name} starting up...")
    Base.metadata.create_all(bind=engine)
    logger.info("💾 Database tables ready")
    logger.info(f"🌐 Translation provider: {settings.translation_provider}")
    logger.info("✅ All systems operational!")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.reload)
