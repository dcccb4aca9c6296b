from __future__ import annotations
from typing import Callable, List, Sequence
from fastapi import FastAPI, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse
from loguru import logger
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from shared.config import settings
from shared.errors import ClientError, DreamLensError, InvalidInput
from shared.logging import setup_logging
from agents.dream_analyze import analyze_dream, parse_request
from agents.factory import generate as bedrock_generate
from client.page import render_page, state_from_form
from client.state import INITIAL, submit

setup_logging()

app = FastAPI(title="Dream Lens API", version="1.0.0")


class AnalyzeResponse(BaseModel):
    analysis: str

class ErrorResponse(BaseModel):
    error: str


def get_generator() -> Callable[[str], str]:
    return bedrock_generate


@app.exception_handler(DreamLensError)
async def dreamlens_error_handler(_request: Request, exc: DreamLensError):
    if isinstance(exc, InvalidInput):
        logger.info("Rejected analysis request: {}", exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.get("/ping")
def ping():
    return {
        "ok": True,
        "region": settings.aws_region,
        "model": settings.bedrock_text_model_id,
        "stage": settings.stage,
    }

@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(request: Request, generate: Callable[[str], str] = Depends(get_generator)):
    """
    Body: {"dream": str, "emotions": [str, ...]}
    200 -> {"analysis": raw model text}; 400/500 -> {"error": message}.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidInput()
    req = parse_request(payload)
    result = await run_in_threadpool(analyze_dream, req, generate)
    return AnalyzeResponse(analysis=result.analysis)


@app.get("/", response_class=HTMLResponse)
def home():
    return render_page(INITIAL)

@app.post("/", response_class=HTMLResponse)
def home_submit(
    dream: str = Form(""),
    emotion: List[str] = Form([]),
    generate: Callable[[str], str] = Depends(get_generator),
):
    def analyze_local(text: str, emotions: Sequence[str]) -> str:
        try:
            req = parse_request({"dream": text, "emotions": list(emotions)})
            return analyze_dream(req, generate).analysis
        except DreamLensError as e:
            raise ClientError(e.message)

    state = submit(state_from_form(dream, emotion), analyze_local)
    return render_page(state)
