"""FastAPI brief parser service — turns free-form advertising briefs into structured fields.

Uses OpenAI when an API key is configured, the heuristic field extractor otherwise
or whenever the AI call fails.
Privacy: brief text is never logged, only its length.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from models import BriefParsingRequest, BriefParsingResponse, ErrorResponse
from openai_client import OpenAIClient
from parsing import build_response, parse_brief_text

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_ai_client: OpenAIClient | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the OpenAI client on startup if an API key is configured."""
    global _ai_client

    if not settings.OPENAI_API_KEY:
        logger.info("OpenAI not configured (OPENAI_API_KEY is empty), heuristic parsing only")
        _ai_client = None
    else:
        logger.info("OpenAI brief parsing enabled: model=%s", settings.OPENAI_MODEL)
        _ai_client = OpenAIClient()

    yield

    if _ai_client is not None:
        _ai_client.close()
        _ai_client = None


app = FastAPI(title="Brief Parser", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.post(
    "/api/v1/parse-brief",
    response_model=BriefParsingResponse,
    response_model_exclude_none=True,
)
def parse_brief(request: BriefParsingRequest):
    """Parse an advertising brief into structured fields."""
    brief_text = request.brief_text
    if len(brief_text.strip()) < settings.MIN_BRIEF_LENGTH:
        return _error(
            400,
            f"Brief text is required and must be at least {settings.MIN_BRIEF_LENGTH} characters long",
        )

    logger.info(
        "Parsing brief: size=%d chars file=%s",
        len(brief_text),
        request.file_name or "-",
    )

    try:
        outcome = parse_brief_text(brief_text, _ai_client)
        response = build_response(outcome, request.file_name)
    except Exception:
        logger.exception("Error parsing brief")
        return _error(500, "Internal server error parsing brief")

    logger.info("Brief parsed: source=%s", response.metadata.source)
    return response


@app.get("/health")
async def health():
    """Return service status and AI availability."""
    base = {
        "status": "healthy",
        "ai_available": _ai_client is not None,
    }

    if _ai_client is not None:
        base["model"] = _ai_client.model

    return base


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
