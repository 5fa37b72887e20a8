import logging

from fastapi import APIRouter, Depends, HTTPException

from db import DocumentStore, RealtimeStore, UpstreamServiceError
from dependencies import get_completion_client, get_document_store, get_realtime_store
from schemas import AIQuery, AIQueryOut, AutoRunOut
from services.ai_service import answer_query, run_auto_insight
from services.completion import AI_FAILED_MESSAGE, CompletionClient, CompletionError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("/query", response_model=AIQueryOut)
async def ai_query(
    query: AIQuery,
    realtime: RealtimeStore = Depends(get_realtime_store),
    documents: DocumentStore = Depends(get_document_store),
    completion: CompletionClient = Depends(get_completion_client),
):
    """
    Ask a question about the company.

    - **mode**: BOTH (default, company data then general knowledge),
      JARVIS (company data only) or GEMI (general knowledge only)
    """
    try:
        reply, intent = await answer_query(query.prompt, query.mode, realtime, documents, completion)
    except CompletionError:
        raise HTTPException(status_code=500, detail=AI_FAILED_MESSAGE)
    except UpstreamServiceError as e:
        logger.error(f"AI query could not load company data: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"reply": reply, "intent": intent}


@router.post("/auto-run", response_model=AutoRunOut)
async def ai_auto_run(
    realtime: RealtimeStore = Depends(get_realtime_store),
    documents: DocumentStore = Depends(get_document_store),
    completion: CompletionClient = Depends(get_completion_client),
):
    """Generate and store one AI risk / growth alert now."""
    try:
        alert = await run_auto_insight(realtime, documents, completion)
    except CompletionError:
        raise HTTPException(status_code=500, detail=AI_FAILED_MESSAGE)
    except UpstreamServiceError as e:
        logger.error(f"AI auto-run failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "alert": alert}
