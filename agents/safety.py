from __future__ import annotations
import threading
from functools import lru_cache
from typing import Any, Dict, List, Tuple

from loguru import logger

from shared.aws import bedrock_client
from shared.config import Settings, settings as default_settings

# Harm category -> Bedrock guardrail content filter type.
HARM_CATEGORIES: Dict[str, str] = {
    "harassment": "INSULTS",
    "hate_speech": "HATE",
    "sexually_explicit": "SEXUAL",
    "dangerous_content": "MISCONDUCT",
}

# Bedrock "MEDIUM" strength blocks medium and high confidence matches,
# i.e. "block medium and above".
FILTER_STRENGTH = "MEDIUM"

BLOCKED_INPUT_MESSAGE = "This dream description can't be analyzed."
BLOCKED_OUTPUT_MESSAGE = "The analysis for this dream was blocked."
GUARDRAIL_DESCRIPTION = "Content safety for dream analysis: harassment, hate, sexual, dangerous."


def content_filters() -> List[Dict[str, str]]:
    return [
        {"type": t, "inputStrength": FILTER_STRENGTH, "outputStrength": FILTER_STRENGTH}
        for t in HARM_CATEGORIES.values()
    ]


def guardrail_definition(name: str) -> Dict[str, Any]:
    """Keyword arguments for ``bedrock.create_guardrail``."""
    return {
        "name": name,
        "description": GUARDRAIL_DESCRIPTION,
        "contentPolicyConfig": {"filtersConfig": content_filters()},
        "blockedInputMessaging": BLOCKED_INPUT_MESSAGE,
        "blockedOutputsMessaging": BLOCKED_OUTPUT_MESSAGE,
    }


def _find_guardrail(client, name: str) -> Tuple[str, str] | None:
    kwargs: Dict[str, Any] = {}
    while True:
        resp = client.list_guardrails(**kwargs)
        for g in resp.get("guardrails", []):
            if g.get("name") == name:
                return g["id"], "DRAFT"
        token = resp.get("nextToken")
        if not token:
            return None
        kwargs["nextToken"] = token


_resolve_lock = threading.Lock()


@lru_cache(maxsize=None)
def _find_or_create(name: str) -> Tuple[str, str]:
    client = bedrock_client()
    found = _find_guardrail(client, name)
    if found:
        logger.info("Using existing guardrail {} ({})", name, found[0])
        return found
    resp = client.create_guardrail(**guardrail_definition(name))
    logger.info("Created guardrail {} ({})", name, resp["guardrailId"])
    return resp["guardrailId"], resp.get("version", "DRAFT")


def resolve_guardrail(settings: Settings = default_settings) -> Tuple[str, str]:
    """Return ``(guardrail_id, version)`` for the content-safety guardrail.

    A configured BEDROCK_GUARDRAIL_ID wins. Otherwise the guardrail is looked up
    by name and created with the policy above when missing; the result is cached
    for the life of the process.
    """
    if settings.guardrail_id:
        return settings.guardrail_id, settings.guardrail_version
    # find-or-create runs at most once per name, even under concurrent cold calls
    with _resolve_lock:
        return _find_or_create(settings.guardrail_name)
