"""FastAPI app exposing the content assessment endpoint."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from trustlens.assessor import AnalysisError
from trustlens.capture import (
    InputValidationError,
    build_request,
    declared_media_type,
    validate_image,
)
from trustlens.config import settings
from trustlens.logger_config import configure_logging
from trustlens.schemas import AssessmentResult
from trustlens.session import AssessmentSession
from trustlens.state import ViewState

configure_logging(settings.log_level)
log = logging.getLogger("trustlens.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(
        "API ready | provider=%s max_image_mb=%d key_set=%s",
        settings.llm_provider,
        settings.max_image_bytes // (1024 * 1024),
        bool(settings.api_key_for()),
    )
    yield


app = FastAPI(
    title="TrustLens API",
    version="0.1.0",
    lifespan=lifespan,
)


def get_session() -> AssessmentSession:
    return AssessmentSession()


@app.exception_handler(InputValidationError)
def input_validation_error(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


@app.exception_handler(AnalysisError)
def analysis_error(request: Request, exc: AnalysisError):
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": str(exc)})


@app.post(
    "/assess",
    summary="Assess a suspicious message or screenshot for scam indicators",
    response_model=AssessmentResult,
    status_code=status.HTTP_200_OK,
)
async def assess_content(
    text: str | None = Form(None, description="Pasted email, SMS or link details"),
    file: UploadFile | None = File(None, description="Screenshot of the suspicious content"),
    session: AssessmentSession = Depends(get_session),
) -> AssessmentResult:
    start_time = time.perf_counter()

    image = None
    if file is not None and file.filename:
        contents = await file.read()
        image = validate_image(declared_media_type(file.filename, file.content_type), contents)

    request = build_request(ViewState(text=text or "", image=image))

    result = await session.assess(request)

    log.info(
        "assess done | level=%s total_ms=%.2f",
        result.threat_level.value,
        (time.perf_counter() - start_time) * 1000,
    )
    return result


if __name__ == "__main__":
    uvicorn.run("trustlens.api:app", host="0.0.0.0", port=8000, reload=True)
