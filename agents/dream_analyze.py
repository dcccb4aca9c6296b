from __future__ import annotations
from typing import Any, Callable, Optional
from loguru import logger
from shared.errors import AnalysisFailed, InvalidInput
from shared.models import AnalysisRequest, AnalysisResult
from .factory import generate as bedrock_generate

ANALYSIS_TEMPLATE = """You are a compassionate and insightful dream analyst who blends symbolism, mythology, psychology, and spiritual archetypes. A user has described their dream in vivid detail. Your task is to deeply analyze it—unpacking symbols, emotional tones, and psychological implications—and offer meaningful insights.

Structure your response like this:

🐉 Symbolic Summary
Summarize the dream's core image(s) and offer a symbolic overview (1–2 paragraphs), using metaphors and archetypes when appropriate.

🧩 Interpretation Themes
Break down the dream with 3–5 subheadings, each exploring a different angle. For each:
- Identify symbols and emotions.
- Offer possible meanings (psychological, emotional, spiritual).
- Use relatable language and mythic/psychological references if relevant.

🪞 Reflective Questions
List 2–3 deep, open-ended questions that help the user introspect and connect the dream to their waking life.

🔮 Hidden Message
Conclude with a one-sentence metaphorical insight—something poetic or powerful that reflects the dream's hidden wisdom.

💡 Conclusion
Wrap up the interpretation with an empowering message about transformation, growth, or emotional insight.

Dream description: {dream}
Emotions: {emotions}.

Use the specified emoji for each section in your response, and do not repeat emojis. Format clearly for easy reading. Make the result in 100 words."""

Generator = Callable[[str], str]


def parse_request(payload: Any) -> AnalysisRequest:
    if not isinstance(payload, dict):
        raise InvalidInput()
    dream = payload.get("dream")
    emotions = payload.get("emotions")
    if not isinstance(dream, str) or not dream:
        raise InvalidInput()
    if not isinstance(emotions, list) or not emotions:
        raise InvalidInput()
    if not all(isinstance(e, str) for e in emotions):
        raise InvalidInput()
    return AnalysisRequest(dream=dream, emotions=tuple(emotions))


def build_prompt(req: AnalysisRequest) -> str:
    # str.format does not re-scan substituted values, so braces in the dream are safe.
    return ANALYSIS_TEMPLATE.format(dream=req.dream, emotions=", ".join(req.emotions))


def analyze_dream(req: AnalysisRequest, generate: Optional[Generator] = None) -> AnalysisResult:
    """Run one analysis: build the prompt, call the model once, return its raw text.

    Provider failures are logged here and replaced by a generic ``AnalysisFailed``.
    """
    generate = generate or bedrock_generate
    prompt = build_prompt(req)
    try:
        text = generate(prompt)
    except Exception as exc:
        logger.exception("Dream analysis error")
        raise AnalysisFailed() from exc
    return AnalysisResult(analysis=text)
