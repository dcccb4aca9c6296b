from __future__ import annotations
from typing import Optional, Sequence
import httpx
from shared.config import settings
from shared.errors import ClientError
from .state import GENERIC_FAILURE


class DreamApiClient:
    """Talks to ``POST /api/analyze``; every failure becomes a ClientError."""

    def __init__(self, base_url: Optional[str] = None, *, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._transport = transport

    def analyze(self, dream: str, emotions: Sequence[str]) -> str:
        try:
            with httpx.Client(base_url=self.base_url, transport=self._transport, timeout=None) as http:
                res = http.post("/api/analyze", json={"dream": dream, "emotions": list(emotions)})
        except httpx.HTTPError:
            raise ClientError(GENERIC_FAILURE)

        try:
            data = res.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        if res.status_code != 200:
            raise ClientError(data.get("error") or "Unknown error")
        analysis = data.get("analysis")
        if not isinstance(analysis, str):
            raise ClientError(GENERIC_FAILURE)
        return analysis
