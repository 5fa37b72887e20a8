from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

import config
from db import DocumentStore, IdentityProvider, RealtimeStore, init_firebase
from dependencies import router as dependencies_router
from error_handlers import register_error_handlers
from router import ai, attendance, auth, employees, leave
from services.completion import CompletionClient
from services.scheduler import InsightScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: missing credentials are fatal here, not at import time
    firebase_app = init_firebase()
    if not config.GEMINI_API_KEY:
        raise RuntimeError("GEMINI_API_KEY environment variable is not set")

    app.state.realtime = RealtimeStore(firebase_app)
    app.state.documents = DocumentStore(firebase_app)
    app.state.identity = IdentityProvider(firebase_app)
    app.state.completion = CompletionClient(config.GEMINI_API_KEY)

    scheduler = None
    if config.AI_AUTO_RUN_MINUTES > 0:
        scheduler = InsightScheduler(
            app.state.realtime,
            app.state.documents,
            app.state.completion,
            minutes=config.AI_AUTO_RUN_MINUTES,
        )
        scheduler.start()

    logger.info(f"GrowthOS AI running on port {config.PORT}")
    try:
        yield
    finally:
        # shutdown
        if scheduler:
            scheduler.stop()


app = FastAPI(
    title="GrowthOS HR API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(dependencies_router)
app.include_router(employees.router)
app.include_router(attendance.router)
app.include_router(leave.router)
app.include_router(ai.router)
app.include_router(auth.router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "GrowthOS AI Backend Running"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)

# uvicorn main:app --reload --port 5000
# http://127.0.0.1:5000/docs
# for tests run: python -m pytest -q
