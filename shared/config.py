from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))

def _env_bool(name: str, default: str = "false"):
    return field(default_factory=lambda: os.getenv(name, default).lower() == "true")

def _env_float(name: str, default: str):
    return field(default_factory=lambda: float(os.getenv(name, default)))

def _env_int_opt(name: str):
    def read() -> Optional[int]:
        raw = os.getenv(name, "").strip()
        return int(raw) if raw else None
    return field(default_factory=read)


@dataclass(frozen=True)
class Settings:
    aws_region: str = _env("AWS_REGION", "us-west-2")
    stage: str = _env("STAGE", "dev")

    # Bedrock
    bedrock_text_model_id: str = _env("BEDROCK_TEXT_MODEL_ID", "us.anthropic.claude-sonnet-4-20250514-v1:0")
    llm_temperature: float = _env_float("LLM_TEMPERATURE", "0.3")
    llm_top_p: float = _env_float("LLM_TOP_P", "0.8")
    llm_max_tokens: Optional[int] = _env_int_opt("LLM_MAX_TOKENS")
    llm_streaming: bool = _env_bool("LLM_STREAMING", "false")

    # Guardrail (content safety)
    guardrail_id: str = _env("BEDROCK_GUARDRAIL_ID", "")
    guardrail_version: str = _env("BEDROCK_GUARDRAIL_VERSION", "DRAFT")
    guardrail_name: str = _env("BEDROCK_GUARDRAIL_NAME", "dreamlens-content-safety")

    # Logging
    log_level: str = _env("LOG_LEVEL", "INFO")
    log_json: bool = _env_bool("LOG_JSON", "false")

    # Client
    api_base_url: str = _env("DREAMLENS_API_URL", "http://localhost:8000")

settings = Settings()
