from __future__ import annotations
import base64
import json
from agents.dream_analyze import analyze_dream, parse_request
from shared.errors import DreamLensError, InvalidInput
from shared.logging import setup_logging

setup_logging()

def _ok(b, c=200):
    return {"statusCode": c, "headers": {"Content-Type": "application/json"},
            "body": json.dumps(b, ensure_ascii=False)}

def _payload(event):
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)

def handler(event, _ctx, generate=None):
    try:
        payload = _payload(event)
    except ValueError:
        return _ok({"error": InvalidInput.default_message}, 400)
    try:
        result = analyze_dream(parse_request(payload), generate)
    except DreamLensError as e:
        return _ok({"error": e.message}, e.status_code)
    return _ok({"analysis": result.analysis})
