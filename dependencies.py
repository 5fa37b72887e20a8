from fastapi import APIRouter, Request
from datetime import datetime, timezone
import logging

from db import DocumentStore, IdentityProvider, RealtimeStore
from services.completion import CompletionClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Long-lived Firebase / Gemini handles live on app.state (set in main.lifespan).
# Tests swap them through app.dependency_overrides.


def get_realtime_store(request: Request) -> RealtimeStore:
    return request.app.state.realtime


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.documents


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion


router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring.
    Reports whether the Firebase and Gemini clients were initialized.
    """
    state = request.app.state
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "firebase": getattr(state, "realtime", None) is not None,
        "ai": getattr(state, "completion", None) is not None,
    }
