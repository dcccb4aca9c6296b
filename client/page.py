from __future__ import annotations
from typing import Iterable
from jinja2 import Environment, select_autoescape
from .formatter import format_result
from .state import EMOTIONS, UIState, can_submit

PAGE_TEMPLATE = """
{% macro render_block(entry) -%}
  {%- if entry.kind == "bullets" -%}
    <ul class="bullets">{% for item in entry.items %}<li>{{ item }}</li>{% endfor %}</ul>
  {%- else -%}
    <div class="{{ entry.kind }}">{{ entry.text }}</div>
  {%- endif -%}
{%- endmacro %}
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Dream Analyzer</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    body { font-family: system-ui,-apple-system,Segoe UI,Roboto,Ubuntu; display:flex; min-height:100vh; align-items:center; justify-content:center; margin:0; background:#f4f2f8; color:#222; }
    .card { width: min(640px, 92vw); background: rgba(255,255,255,0.7); border: 1px solid #ddd; border-radius: 16px; padding: 22px; }
    h1 { font-size: 40px; margin: 0 0 8px; text-align:center; }
    .sub { text-align:center; color:#555; margin-bottom: 16px; }
    textarea { width:100%; min-height:64px; border-radius:10px; border:1px solid #ccc; padding:8px; box-sizing:border-box; }
    .emotions { display:flex; flex-wrap:wrap; gap:8px; margin:12px 0; }
    .emotions label { border:1px solid #ddd; border-radius:8px; padding:6px 10px; cursor:pointer; }
    button, .back { padding:8px 16px; border-radius:12px; border:0; background:#111; color:#fff; font-weight:600; text-decoration:none; }
    button:disabled { opacity:0.4; }
    .error { color:#c00; margin-top:12px; }
    .heading { font-weight:700; font-size:1.25em; margin:16px 0 8px; }
    .subheading { font-weight:600; margin:12px 0 4px; }
    .line { margin-bottom:4px; }
  </style>
</head>
<body>
  <div class="card">
    <h1>Dream Analyzer</h1>
    {% if state.result %}
      <a class="back" href="/">&#8592; Back</a>
      <div class="result">
        {% for entry in blocks %}{{ render_block(entry) }}
        {% endfor %}
      </div>
    {% else %}
      <div class="sub">Share your dream and emotions to receive an insightful analysis</div>
      <form method="post" action="/">
        <textarea name="dream" placeholder="Describe your dream..." oninput="sync()">{{ state.dream_text }}</textarea>
        <div>How did you feel?</div>
        <div class="emotions">
          {% for emotion in emotions %}
          <label><input type="checkbox" name="emotion" value="{{ emotion }}" onchange="sync()"
            {% if emotion in state.selected_emotions %}checked{% endif %}> {{ emotion }}</label>
          {% endfor %}
        </div>
        <button type="submit" id="analyze" {% if not submittable %}disabled{% endif %}>Analyze</button>
      </form>
      {% if state.error %}<div class="error">{{ state.error }}</div>{% endif %}
      <script>
        function sync() {
          var text = document.querySelector('textarea[name=dream]').value;
          var picked = document.querySelectorAll('input[name=emotion]:checked').length;
          document.getElementById('analyze').disabled = !(text && picked);
        }
      </script>
    {% endif %}
  </div>
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True))
_template = _env.from_string(PAGE_TEMPLATE)


def state_from_form(dream: str, emotions: Iterable[str]) -> UIState:
    picked = []
    for e in emotions:
        if e in EMOTIONS and e not in picked:
            picked.append(e)
    return UIState(dream_text=dream or "", selected_emotions=tuple(picked))


def render_page(state: UIState) -> str:
    return _template.render(
        state=state,
        emotions=EMOTIONS,
        submittable=can_submit(state),
        blocks=format_result(state.result) if state.result else [],
    )
