from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True)
class AnalysisRequest:
    dream: str
    emotions: Tuple[str, ...]

@dataclass(frozen=True)
class AnalysisResult:
    analysis: str
