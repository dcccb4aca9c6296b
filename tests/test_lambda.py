"""Tests for the API Gateway Lambda handler."""

import base64
import json

from lambdas.analyze.index import handler


def event(body):
    return {"body": json.dumps(body)}


class TestAnalyzeHandler:
    def test_success(self, fake_generate):
        resp = handler(event({"dream": "A burning library", "emotions": ["Sadness"]}), None, fake_generate)
        assert resp["statusCode"] == 200
        assert resp["headers"]["Content-Type"] == "application/json"
        assert json.loads(resp["body"]) == {"analysis": fake_generate.reply}

    def test_base64_body(self, fake_generate):
        raw = json.dumps({"dream": "A burning library", "emotions": ["Fear"]}).encode()
        resp = handler({"body": base64.b64encode(raw).decode(), "isBase64Encoded": True}, None, fake_generate)
        assert resp["statusCode"] == 200

    def test_missing_fields(self, fake_generate):
        resp = handler(event({"dream": "A burning library"}), None, fake_generate)
        assert resp["statusCode"] == 400
        assert json.loads(resp["body"]) == {"error": "Missing dream or emotions"}
        assert fake_generate.prompts == []

    def test_missing_or_broken_body(self, fake_generate):
        assert handler({}, None, fake_generate)["statusCode"] == 400
        assert handler({"body": "{not json"}, None, fake_generate)["statusCode"] == 400
        assert fake_generate.prompts == []

    def test_provider_failure(self, failing_generate):
        resp = handler(event({"dream": "A burning library", "emotions": ["Anger"]}), None, failing_generate)
        assert resp["statusCode"] == 500
        assert json.loads(resp["body"]) == {"error": "Failed to analyze dream"}
