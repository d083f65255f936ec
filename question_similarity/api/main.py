"""
FastAPI application entry point.

Exposes the similarity engine over HTTP. The question registry is opened on
startup and closed on shutdown.
"""

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

from question_similarity import __version__
from question_similarity.infra.logging_config import setup_logging
from question_similarity.registry import init_registry, close_registry
from .routers import questions
from .dependencies.auth import verify_api_key, API_AUTH_ENABLED
from .dependencies.engine import init_engine_config, reset_engine_config

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure logging, validate the engine config and open the registry.

    LOG_LEVEL sets the level (default INFO). LOG_DIR sets the directory for
    daily log files (default logs); an empty LOG_DIR logs to console only.
    """
    logger = setup_logging(
        os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR", "logs") or None,
    )

    # Out-of-range values raise ConfigurationError and abort startup
    config = init_engine_config()
    logger.info(
        f"[API] Thresholds: similar > {config.similarity_threshold}, "
        f"duplicate >= {config.duplicate_threshold}, cap {config.candidate_cap}"
    )

    # Requests are served from executor threads
    init_registry(check_same_thread=False)

    yield

    close_registry()
    reset_engine_config()


tags_metadata = [
    {
        "name": "questionnaires",
        "description": "Similar questions, answer suggestions and duplicate detection for questionnaires",
    },
]

app = FastAPI(
    title="Question Similarity API",
    lifespan=lifespan,
    description="""
## Question Similarity API

Lexical similarity for security and due-diligence questionnaires.

### Authentication
When `API_AUTH_ENABLED=true`, all endpoints except `/health` require
an `X-API-Key` header matching the `API_KEY` environment variable.

### Features
- **Similar questions**: rank previously answered questions against a new one
- **Answer suggestions**: reuse answers with their questionnaire of origin
- **Duplicates**: find questions asked twice within one questionnaire

### Usage
```bash
uvicorn question_similarity.api.main:app --host 127.0.0.1 --port 8000

curl "http://localhost:8000/questionnaires/similar-questions?organizationId=org-1&questionText=Do%20you%20encrypt%20data%20at%20rest"
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)


@app.get("/health")
async def health_check():
    """Health check endpoint. Not authenticated."""
    return {"status": "ok", "version": __version__}


auth_dependency = [Depends(verify_api_key)] if API_AUTH_ENABLED else []

app.include_router(
    questions.router,
    prefix="/questionnaires",
    tags=["questionnaires"],
    dependencies=auth_dependency,
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
