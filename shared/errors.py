from __future__ import annotations


class DreamLensError(Exception):
    """Error that may cross the API boundary; `message` is safe to show."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(DreamLensError):
    status_code = 400
    default_message = "Missing dream or emotions"


class AnalysisFailed(DreamLensError):
    status_code = 500
    default_message = "Failed to analyze dream"


class ModelInvocationError(RuntimeError):
    """The model answered, but not with usable text (guardrail block, empty output)."""


class ClientError(Exception):
    """Raised by the UI clients; the message is shown to the user verbatim."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
