from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple
from loguru import logger
from shared.errors import ClientError

EMOTIONS: Tuple[str, ...] = (
    "Joy", "Fear", "Sadness", "Anxiety", "Peace", "Confusion", "Excitement", "Anger",
)

GENERIC_FAILURE = "Failed to analyze dream."

Analyzer = Callable[[str, Sequence[str]], str]


@dataclass(frozen=True)
class UIState:
    dream_text: str = ""
    selected_emotions: Tuple[str, ...] = ()
    loading: bool = False
    result: Optional[str] = None
    error: Optional[str] = None


INITIAL = UIState()


def set_dream_text(state: UIState, text: str) -> UIState:
    return replace(state, dream_text=text)

def toggle_emotion(state: UIState, emotion: str) -> UIState:
    if emotion in state.selected_emotions:
        kept = tuple(e for e in state.selected_emotions if e != emotion)
        return replace(state, selected_emotions=kept)
    return replace(state, selected_emotions=state.selected_emotions + (emotion,))

def can_submit(state: UIState) -> bool:
    return bool(state.dream_text) and len(state.selected_emotions) > 0 and not state.loading

def begin_submit(state: UIState) -> UIState:
    return replace(state, loading=True, result=None, error=None)

def submit_succeeded(state: UIState, analysis: str) -> UIState:
    return replace(state, loading=False, result=analysis, error=None)

def submit_failed(state: UIState, message: str) -> UIState:
    return replace(state, loading=False, result=None, error=message or GENERIC_FAILURE)

def reset(_state: UIState) -> UIState:
    return INITIAL


def submit(state: UIState, analyze: Analyzer) -> UIState:
    """Run one submission; a state that cannot submit comes back untouched."""
    if not can_submit(state):
        return state
    state = begin_submit(state)
    try:
        analysis = analyze(state.dream_text, list(state.selected_emotions))
    except ClientError as e:
        return submit_failed(state, e.message)
    except Exception:
        logger.exception("Unexpected failure while submitting dream")
        return submit_failed(state, GENERIC_FAILURE)
    return submit_succeeded(state, analysis)
