from __future__ import annotations
from typing import Optional, Dict, Any
from dataclasses import dataclass
import threading
from botocore.config import Config
from loguru import logger
from strands.models import BedrockModel
from strands import Agent
from shared.config import Settings, settings as default_settings
from shared.errors import ModelInvocationError
from .safety import resolve_guardrail

@dataclass
class ModelOptions:
    temperature: float = 0.3
    top_p: float = 0.8
    max_tokens: Optional[int] = None
    stream: bool = False
    guardrail_id: Optional[str] = None
    guardrail_version: Optional[str] = None

DEFAULT_SYSTEM = (
    "You are a dream analyst. Answer only with the requested analysis."
)

def _build_boto_config() -> Config:
    # single attempt, no retries
    return Config(retries={"total_max_attempts": 1, "mode": "standard"})

def _options_from(settings: Settings) -> ModelOptions:
    guardrail_id, guardrail_version = resolve_guardrail(settings)
    return ModelOptions(
        temperature=settings.llm_temperature,
        top_p=settings.llm_top_p,
        max_tokens=settings.llm_max_tokens,
        stream=settings.llm_streaming,
        guardrail_id=guardrail_id,
        guardrail_version=guardrail_version,
    )

def make_model(settings: Settings = default_settings, opts: Optional[ModelOptions] = None) -> BedrockModel:
    opts = opts or _options_from(settings)
    kwargs: Dict[str, Any] = {
        "model_id": settings.bedrock_text_model_id,
        "region_name": settings.aws_region,
        "streaming": opts.stream,
        "temperature": opts.temperature,
        "top_p": opts.top_p,
        "boto_client_config": _build_boto_config(),
    }
    if opts.max_tokens is not None:
        kwargs["max_tokens"] = opts.max_tokens
    if opts.guardrail_id:
        kwargs["guardrail_id"] = opts.guardrail_id
        kwargs["guardrail_version"] = opts.guardrail_version or "DRAFT"
    return BedrockModel(**kwargs)

_model: Optional[BedrockModel] = None
_model_lock = threading.Lock()

def _shared_model() -> BedrockModel:
    global _model
    with _model_lock:
        if _model is None:
            _model = make_model()
        return _model

def make_agent(system_prompt: str | None = None, *, model: Optional[BedrockModel] = None) -> Agent:
    # A new Agent per request: Agents accumulate conversation history.
    return Agent(
        model=model or _shared_model(),
        system_prompt=system_prompt or DEFAULT_SYSTEM,
        callback_handler=None,
        # None: one model attempt, no Strands backoff
        retry_strategy=None,
    )

def generate(prompt: str) -> str:
    """Send one prompt to the model and return its text."""
    agent = make_agent()
    logger.debug("Invoking {} ({} chars)", default_settings.bedrock_text_model_id, len(prompt))
    resp = agent(prompt)
    if getattr(resp, "stop_reason", None) == "guardrail_intervened":
        raise ModelInvocationError("guardrail intervened")
    text = getattr(resp, "text", None)
    if text is None:
        text = str(resp)
    if not isinstance(text, str) or not text.strip():
        raise ModelInvocationError("empty model response")
    return text
