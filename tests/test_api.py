"""HTTP tests for the FastAPI app."""

import pytest


class TestAnalyzeEndpoint:
    def test_success_returns_raw_text(self, api_client, fake_generate):
        fake_generate.reply = "🐉 **Symbolic Summary**\nThe moon is a mirror."
        res = api_client.post("/api/analyze", json={"dream": "A mirror moon", "emotions": ["Peace", "Joy"]})
        assert res.status_code == 200
        assert res.json() == {"analysis": "🐉 **Symbolic Summary**\nThe moon is a mirror."}
        assert len(fake_generate.prompts) == 1
        assert "Dream description: A mirror moon" in fake_generate.prompts[0]
        assert "Emotions: Peace, Joy." in fake_generate.prompts[0]

    @pytest.mark.parametrize("payload", [
        {},
        {"dream": "", "emotions": ["Joy"]},
        {"dream": "A mirror moon"},
        {"dream": "A mirror moon", "emotions": []},
        {"dream": "A mirror moon", "emotions": "Joy"},
        [],
    ])
    def test_invalid_input_is_400_without_model_call(self, api_client, fake_generate, payload):
        res = api_client.post("/api/analyze", json=payload)
        assert res.status_code == 400
        assert res.json() == {"error": "Missing dream or emotions"}
        assert fake_generate.prompts == []

    def test_non_json_body_is_400(self, api_client, fake_generate):
        res = api_client.post("/api/analyze", content=b"dream=moon",
                              headers={"content-type": "application/json"})
        assert res.status_code == 400
        assert fake_generate.prompts == []

    def test_provider_failure_is_generic_500(self, api_client, fake_generate):
        fake_generate.error = RuntimeError("AccessDeniedException: arn:aws:iam::1234")
        res = api_client.post("/api/analyze", json={"dream": "A mirror moon", "emotions": ["Fear"]})
        assert res.status_code == 500
        assert res.json() == {"error": "Failed to analyze dream"}
        assert "arn:aws" not in res.text


class TestPing:
    def test_ping(self, api_client):
        body = api_client.get("/ping").json()
        assert body["ok"] is True
        assert {"region", "model", "stage"} <= set(body)


class TestPage:
    def test_input_view(self, api_client):
        res = api_client.get("/")
        assert res.status_code == 200
        assert "Describe your dream..." in res.text
        assert 'id="analyze" disabled' in res.text
        for emotion in ("Joy", "Excitement", "Anger"):
            assert f'value="{emotion}"' in res.text

    def test_submit_renders_formatted_result(self, api_client, fake_generate):
        fake_generate.reply = "Dream Interpretation: flying\nAdvice:\nrest, breathe"
        res = api_client.post("/", data={"dream": "I was flying", "emotion": ["Joy", "Fear"]})
        assert res.status_code == 200
        assert '<div class="heading">Dream Interpretation: flying</div>' in res.text
        assert "<li>rest</li><li>breathe</li>" in res.text
        assert "Back" in res.text
        assert "Emotions: Joy, Fear." in fake_generate.prompts[0]

    def test_submit_without_emotion_sends_nothing(self, api_client, fake_generate):
        res = api_client.post("/", data={"dream": "I was flying"})
        assert res.status_code == 200
        assert fake_generate.prompts == []
        assert "I was flying" in res.text

    def test_unknown_emotions_are_ignored(self, api_client, fake_generate):
        api_client.post("/", data={"dream": "I was flying", "emotion": ["Joy", "Smug"]})
        assert "Emotions: Joy." in fake_generate.prompts[0]

    def test_failure_shows_message_on_input_view(self, api_client, fake_generate):
        fake_generate.error = RuntimeError("boom")
        res = api_client.post("/", data={"dream": "I was flying", "emotion": ["Joy"]})
        assert '<div class="error">Failed to analyze dream</div>' in res.text
        assert "boom" not in res.text

    def test_user_text_is_escaped(self, api_client, fake_generate):
        fake_generate.reply = "<img src=x>"
        res = api_client.post("/", data={"dream": "<b>moon</b>", "emotion": ["Joy"]})
        assert "&lt;img src=x&gt;" in res.text
        assert "<img src=x>" not in res.text
